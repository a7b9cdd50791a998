from __future__ import annotations

import base64
import hashlib

import pytest

from wheelparse.model.wheel import (
    Digest,
    MalformedDigestError,
    MalformedSizeError,
    RecordDecodeError,
    RecordEntry,
    RecordFile,
    RecordFileParseError,
)


def test_parse_entries_with_and_without_digest():
    record = RecordFile.parse("file.py,sha256=AAA,3144\ndist-1.0.dist-info/RECORD,,\n")
    assert list(record) == [
        RecordEntry(path="file.py", digest=Digest("sha256", "AAA"), size=3144),
        RecordEntry(path="dist-1.0.dist-info/RECORD", digest=None, size=None),
    ]


def test_digest_and_size_are_independent():
    record = RecordFile.parse("a.py,sha256=AAA,\nb.py,,12\n")
    assert record[0].digest == Digest("sha256", "AAA")
    assert record[0].size is None
    assert record[1].digest is None
    assert record[1].size == 12


def test_leading_separator_is_stripped_once():
    record = RecordFile.parse("/pkg/__init__.py,sha256=X,5\npkg/sub/__init__.py,sha256=Y,6\n//abs.py,,\n")
    assert record.paths() == ["pkg/__init__.py", "pkg/sub/__init__.py", "/abs.py"]


def test_custom_separators():
    record = RecordFile.parse("\\pkg\\mod.py,,\n/pkg/other.py,,\n", separators="/\\")
    assert record.paths() == ["pkg\\mod.py", "pkg/other.py"]


def test_paths_are_not_otherwise_normalized():
    record = RecordFile.parse("Pkg/../Data/File.TXT,,\n")
    assert record.paths() == ["Pkg/../Data/File.TXT"]


def test_quoted_paths():
    record = RecordFile.parse('"weird,name.py",sha256=X,1\n"say ""hi"".txt",,\n')
    assert record.paths() == ["weird,name.py", 'say "hi".txt']


def test_digest_splits_on_first_equals_only():
    record = RecordFile.parse("a.py,sha256=abc==,3\n")
    assert record[0].digest == Digest(algorithm="sha256", encoded_value="abc==")


def test_order_is_preserved_without_dedup():
    text = "b.py,,\na.py,,\nb.py,,\n"
    assert RecordFile.parse(text).paths() == ["b.py", "a.py", "b.py"]


def test_no_trailing_newline_and_crlf():
    assert len(RecordFile.parse("a.py,,1")) == 1
    assert RecordFile.parse("a.py,,1\r\nb.py,,2\r\n").paths() == ["a.py", "b.py"]


def test_blank_lines_are_skipped():
    assert RecordFile.parse("\na.py,,1\n\n").paths() == ["a.py"]


def test_empty_record():
    assert len(RecordFile.parse("")) == 0


def test_parse_bytes():
    record = RecordFile.parse("café.py,,4\n".encode("utf-8"))
    assert record.paths() == ["café.py"]


def test_malformed_digest():
    with pytest.raises(MalformedDigestError) as exc_info:
        RecordFile.parse("a.py,sha256AAA,3\n")
    assert exc_info.value.value == "sha256AAA"


@pytest.mark.parametrize("size", ["abc", "-1", "1.0", "+3"])
def test_malformed_size(size):
    with pytest.raises(MalformedSizeError) as exc_info:
        RecordFile.parse(f"a.py,sha256=AAA,{size}\n")
    assert exc_info.value.value == size


@pytest.mark.parametrize("text, line", [
    ("a.py,sha256=AAA\n", 1),
    ("a.py,,1\nb.py,,1,extra\n", 2),
    ("lonely\n", 1),
])
def test_wrong_column_count(text, line):
    with pytest.raises(RecordDecodeError) as exc_info:
        RecordFile.parse(text)
    assert exc_info.value.line == line


def test_broken_quoting():
    with pytest.raises(RecordDecodeError):
        RecordFile.parse('"a.py"x,,1\n')


def test_undecodable_bytes():
    with pytest.raises(RecordDecodeError):
        RecordFile.parse(b"\xff\xfe.py,,1\n")


def test_errors_share_a_base_class():
    for text in ("a.py,x,1\n", "a.py,,x\n", "a.py\n"):
        with pytest.raises(RecordFileParseError):
            RecordFile.parse(text)


def test_first_error_fails_the_whole_parse():
    with pytest.raises(MalformedSizeError):
        RecordFile.parse("a.py,,1\nb.py,,bad\nc.py,,3\n")


def test_find():
    record = RecordFile.parse("a.py,,1\nb.py,,2\n")
    assert record.find("b.py").size == 2
    assert record.find("missing.py") is None


def test_digest_raw_value():
    expected = hashlib.sha256(b"hello").digest()
    encoded = base64.urlsafe_b64encode(expected).rstrip(b"=").decode("ascii")
    record = RecordFile.parse(f"hello.txt,sha256={encoded},5\n")
    assert record[0].digest.raw_value() == expected
