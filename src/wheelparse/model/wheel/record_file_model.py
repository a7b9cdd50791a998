from __future__ import annotations

import base64
import csv
import io
import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, overload

from wheelparse.helper.multiformat_serializable_mixin import MultiformatSerializableMixin
from wheelparse.helper.number_utils import parse_unsigned
from wheelparse.model.wheel.parse_errors import (
    MalformedDigestError,
    MalformedSizeError,
    RecordDecodeError,
)

_LOG = logging.getLogger(__name__)

RECORD_COLUMNS = 3


@dataclass(slots=True, frozen=True)
class Digest(MultiformatSerializableMixin):
    """
    A hash declared for one archive member, written as "algorithm=value".

    Attributes:
        algorithm (str): Hash algorithm name, e.g. "sha256".
        encoded_value (str): The digest as written, normally urlsafe base64
            without padding.
    """
    algorithm: str
    encoded_value: str

    @staticmethod
    def parse(text: str) -> Digest:
        """
        Splits a digest field on its first "=".

        Everything after the first "=" belongs to the value, so base64 padding
        survives intact.

        Raises:
            MalformedDigestError: If the field contains no "=".
        """
        algorithm, sep, encoded_value = text.partition("=")
        if not sep:
            raise MalformedDigestError(text)
        return Digest(algorithm=algorithm, encoded_value=encoded_value)

    def raw_value(self) -> bytes:
        """
        Decodes the urlsafe base64 value into raw digest bytes.

        Returns:
            bytes: The digest bytes.

        Raises:
            binascii.Error: If the value is not valid base64.
        """
        padding = "=" * (-len(self.encoded_value) % 4)
        return base64.urlsafe_b64decode(self.encoded_value + padding)

    def to_mapping(self) -> dict[str, Any]:
        return {"algorithm": self.algorithm, "encoded_value": self.encoded_value}


@dataclass(slots=True, frozen=True)
class RecordEntry(MultiformatSerializableMixin):
    """
    One row of a RECORD manifest.

    The RECORD file lists itself without a digest or size, so both are optional
    and independent of each other.

    Attributes:
        path (str): Archive-relative path of the member.
        digest (Digest | None): The declared hash, if any.
        size (int | None): The declared size in bytes, if any.
    """
    path: str
    digest: Digest | None = None
    size: int | None = None

    def to_mapping(self) -> dict[str, Any]:
        m: dict[str, Any] = {"path": self.path}
        if self.digest is not None:
            m["digest"] = self.digest.to_mapping()
        if self.size is not None:
            m["size"] = self.size
        return m


def _normalize_path(path: str, separators: str) -> str:
    # Some producers write absolute-looking paths; drop exactly one separator.
    if path and path[0] in separators:
        return path[1:]
    return path


def _parse_row(row: list[str], line: int, separators: str) -> RecordEntry:
    if len(row) != RECORD_COLUMNS:
        raise RecordDecodeError(f"expected {RECORD_COLUMNS} columns, found {len(row)}", line)
    path, digest, size = row

    parsed_size = None
    if size:
        parsed_size = parse_unsigned(size)
        if parsed_size is None:
            raise MalformedSizeError(size)

    return RecordEntry(
        path=_normalize_path(path, separators),
        digest=Digest.parse(digest) if digest else None,
        size=parsed_size)


@dataclass(slots=True, frozen=True)
class RecordFile(MultiformatSerializableMixin, Sequence):
    """
    The contents of a wheel's `.dist-info/RECORD` manifest, in file order.

    Entries are neither sorted nor deduplicated, and nothing here checks the
    declared digests or sizes against the archive.

    Attributes:
        entries (tuple[RecordEntry, ...]): The rows of the manifest.
    """
    entries: tuple[RecordEntry, ...] = ()

    @staticmethod
    def parse(text: str | bytes, *, encoding: str = "utf-8", separators: str = "/") -> RecordFile:
        """
        Parses a RECORD manifest.

        The manifest is comma-separated with optional double-quote quoting and no
        header row. Every non-blank row must have exactly three columns: path,
        digest, and size, where the last two may be empty.

        Args:
            text (str | bytes): The manifest contents.
            encoding (str, optional): Encoding used when `text` is bytes.
            separators (str, optional): Characters accepted as a leading path
                separator; one such character is stripped from each path.

        Returns:
            RecordFile: The parsed manifest.

        Raises:
            RecordDecodeError: If the text cannot be decoded or a row is malformed.
            MalformedDigestError: If a digest field lacks "=".
            MalformedSizeError: If a size field is not an unsigned integer.
        """
        if isinstance(text, bytes):
            try:
                text = text.decode(encoding)
            except UnicodeDecodeError as e:
                raise RecordDecodeError(str(e)) from e

        reader = csv.reader(io.StringIO(text, newline=""), strict=True)
        entries: list[RecordEntry] = []
        try:
            for row in reader:
                if not row:
                    continue
                entries.append(_parse_row(row, reader.line_num, separators))
        except csv.Error as e:
            raise RecordDecodeError(str(e), reader.line_num) from e

        _LOG.debug("parsed RECORD manifest with %d entries", len(entries))
        return RecordFile(entries=tuple(entries))

    def find(self, path: str) -> RecordEntry | None:
        """Returns the first entry for `path`, or None."""
        return next((e for e in self.entries if e.path == path), None)

    def paths(self) -> list[str]:
        return [e.path for e in self.entries]

    @overload
    def __getitem__(self, index: int) -> RecordEntry:
        ...

    @overload
    def __getitem__(self, index: slice) -> tuple[RecordEntry, ...]:
        ...

    def __getitem__(self, index):
        return self.entries[index]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[RecordEntry]:
        return iter(self.entries)

    def to_mapping(self) -> dict[str, Any]:
        return {"entries": [e.to_mapping() for e in self.entries]}
