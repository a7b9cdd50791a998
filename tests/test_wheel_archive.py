from __future__ import annotations

import hashlib
from concurrent.futures import ThreadPoolExecutor

import pytest

from wheelparse import WheelInfo
from wheelparse.archive import (
    MemberNotFoundError,
    WheelArchive,
    WheelArchiveError,
    WheelReader,
)
from wheelparse.config import ParserConfig
from wheelparse.model.wheel import Digest, MissingFieldError, NotAWheelError, WheelName


def test_read_member_and_text(make_wheel):
    path = make_wheel()
    with WheelArchive.open(path) as archive:
        assert "demo_pkg-1.0.dist-info/WHEEL" in archive.names()
        assert archive.read_member("demo_pkg/__init__.py") == b""
        assert archive.read_text("demo_pkg-1.0.dist-info/WHEEL").startswith("Wheel-Version: 1.0")


def test_missing_member(make_wheel):
    with WheelArchive.open(make_wheel()) as archive:
        assert not archive.has_member("nope.txt")
        with pytest.raises(MemberNotFoundError) as exc_info:
            archive.read_member("nope.txt")
    assert exc_info.value.member == "nope.txt"


def test_member_reads_are_cached(make_wheel):
    with WheelArchive.open(make_wheel()) as archive:
        first = archive.read_member("demo_pkg-1.0.dist-info/RECORD")
        second = archive.read_member("demo_pkg-1.0.dist-info/RECORD")
    assert first is second


def test_not_a_zip(tmp_path):
    path = tmp_path / "demo_pkg-1.0-py3-none-any.whl"
    path.write_bytes(b"definitely not a zip")
    with pytest.raises(WheelArchiveError):
        WheelArchive.open(path)


def test_reader_member_paths(make_wheel):
    with WheelReader.from_path(make_wheel()) as reader:
        assert reader.member_path("WHEEL") == "demo_pkg-1.0.dist-info/WHEEL"
        assert reader.member_path("RECORD") == "demo_pkg-1.0.dist-info/RECORD"
        assert reader.member_path("METADATA") == "demo_pkg-1.0.dist-info/METADATA"
        with pytest.raises(ValueError):
            reader.member_path("INSTALLER")


def test_reader_parses_manifests(make_wheel):
    with WheelReader.from_path(make_wheel()) as reader:
        assert reader.name.distribution == "demo-pkg"
        wheel = reader.wheel_file()
        record = reader.record_file()
        metadata = reader.metadata_text()

    assert wheel.generator == "bdist_wheel (0.40.0)"
    assert wheel.tags == ("py3-none-any",)
    assert record.paths() == [
        "demo_pkg/__init__.py",
        "demo_pkg-1.0.dist-info/METADATA",
        "demo_pkg-1.0.dist-info/WHEEL",
        "demo_pkg-1.0.dist-info/RECORD",
    ]
    assert record[0].digest == Digest("sha256", "47DEQpj8HBSa-_TImW-5JCeuQeRkm5NMpJWZG3hSuFU")
    assert record[-1].digest is None and record[-1].size is None
    assert "Name: demo_pkg" in metadata


def test_reader_from_path_rejects_bad_filename(tmp_path):
    with pytest.raises(NotAWheelError):
        WheelReader.from_path(tmp_path / "demo_pkg-1.0.tar.gz")


def test_reader_with_external_archive(make_wheel):
    path = make_wheel()
    archive = WheelArchive.open(path)
    reader = WheelReader(archive, WheelName.parse(path.name))
    reader.close()
    # the reader does not own an archive it was handed
    assert reader.wheel_file().wheel_version == "1.0"
    archive.close()


def test_fallback_finds_unescaped_dist_info(make_wheel):
    path = make_wheel(dist_info="Demo.Pkg-1.0.dist-info")
    with WheelReader.from_path(path) as reader:
        assert reader.resolve_member("WHEEL") == "Demo.Pkg-1.0.dist-info/WHEEL"
        assert reader.wheel_file().wheel_version == "1.0"


def test_fallback_ignores_other_versions(make_wheel):
    path = make_wheel(dist_info="demo_pkg-2.0.dist-info")
    with WheelReader.from_path(path) as reader:
        with pytest.raises(MemberNotFoundError) as exc_info:
            reader.wheel_file()
    assert exc_info.value.member == "demo_pkg-1.0.dist-info/WHEEL"


def test_fallback_can_be_disabled(make_wheel):
    path = make_wheel(dist_info="Demo.Pkg-1.0.dist-info")
    config = ParserConfig(dist_info_fallback=False)
    with WheelReader.from_path(path, config=config) as reader:
        with pytest.raises(MemberNotFoundError):
            reader.record_file()


def test_reader_propagates_parse_errors(make_wheel):
    path = make_wheel(members={
        "demo_pkg-1.0.dist-info/WHEEL": "Wheel-Version: 1.0\nRoot-Is-Purelib: true\n",
    })
    with WheelReader.from_path(path) as reader:
        with pytest.raises(MissingFieldError):
            reader.wheel_file()


def test_reader_uses_configured_separators(make_wheel):
    path = make_wheel(members={
        "demo_pkg-1.0.dist-info/RECORD": "\\demo_pkg\\__init__.py,,0\n",
    })
    config = ParserConfig(record_path_separators="/\\")
    with WheelReader.from_path(path, config=config) as reader:
        assert reader.record_file().paths() == ["demo_pkg\\__init__.py"]


def test_wheel_info_build_from_wheel(make_wheel):
    path = make_wheel()
    info = WheelInfo.build_from_wheel(path)

    assert info.filename == "demo_pkg-1.0-py3-none-any.whl"
    assert info.name.distribution == "demo-pkg"
    assert info.wheel.root_is_purelib is True
    assert len(info.record) == 4
    assert info.size == path.stat().st_size
    assert info.sha256 == hashlib.sha256(path.read_bytes()).hexdigest()


def test_archive_shared_between_threads(make_wheel):
    members = {f"demo_pkg/mod{i}.py": f"value = {i}\n" for i in range(20)}
    path = make_wheel(members=members)
    config = ParserConfig(member_cache_size=4)
    with WheelArchive.open(path, config=config) as archive:
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(archive.read_member, list(members) * 10))
    assert results == [data.encode("utf-8") for data in members.values()] * 10
