from __future__ import annotations

import logging
from pathlib import Path

from packaging.utils import canonicalize_name
from packaging.version import InvalidVersion, Version

from wheelparse.archive.wheel_archive import MemberNotFoundError, WheelArchive
from wheelparse.config.parser_config_model import ParserConfig
from wheelparse.model.wheel.record_file_model import RecordFile
from wheelparse.model.wheel.wheel_file_model import WheelFile
from wheelparse.model.wheel.wheel_name_model import WheelName

_LOG = logging.getLogger(__name__)

METADATA = "METADATA"
RECORD = "RECORD"
WHEEL = "WHEEL"

DIST_INFO_MEMBERS = (METADATA, RECORD, WHEEL)

_DIST_INFO_SUFFIX = ".dist-info"


class WheelReader:
    """
    Reads the dist-info manifests of a wheel whose filename has been parsed.

    The reader computes the dist-info member paths from the parsed filename,
    fetches them from the archive, and hands their contents to the matching
    parser. It owns the archive only when created with `from_path()`.

    Attributes:
        archive (WheelArchive): The archive being read.
        name (WheelName): The parsed archive filename.
        config (ParserConfig): Settings used for decoding and lookups.
    """

    def __init__(self, archive: WheelArchive, name: WheelName, *, config: ParserConfig | None = None):
        self.archive = archive
        self.name = name
        self.config = config or archive.config
        self._owns_archive = False

    @classmethod
    def from_path(cls, path: str | Path, *, config: ParserConfig | None = None) -> WheelReader:
        """
        Parses the filename of `path` and opens the archive behind it.

        Args:
            path (str | Path): The wheel file.
            config (ParserConfig | None): Settings; defaults are used when None.

        Returns:
            WheelReader: A reader that closes the archive when it is closed.

        Raises:
            WheelNameParseError: If the filename is not a valid wheel filename.
            WheelArchiveError: If the file is not a zip archive.
        """
        p = Path(path)
        name = WheelName.parse(p.name)
        archive = WheelArchive.open(p, config=config)
        reader = cls(archive, name, config=config)
        reader._owns_archive = True
        return reader

    def member_path(self, member: str) -> str:
        """
        Computes the archive path of a dist-info member.

        Args:
            member (str): One of "METADATA", "RECORD", or "WHEEL".

        Returns:
            str: The path, e.g. "requests-2.29.0.dist-info/WHEEL".

        Raises:
            ValueError: If `member` is not a known dist-info member.
        """
        if member not in DIST_INFO_MEMBERS:
            raise ValueError(f"unknown dist-info member: {member!r}")
        return self.name.dist_info_member(member)

    def _matches(self, dist_info_dir: str) -> bool:
        stem = dist_info_dir[:-len(_DIST_INFO_SUFFIX)]
        name, sep, version = stem.rpartition("-")
        if not sep:
            return False
        try:
            same_version = Version(version) == self.name.version
        except InvalidVersion:
            return False
        return same_version and canonicalize_name(name) == self.name.distribution

    def _find_member(self, member: str) -> str | None:
        for candidate in sorted(self.archive.names()):
            top, sep, rest = candidate.partition("/")
            if sep and rest == member and top.endswith(_DIST_INFO_SUFFIX) and self._matches(top):
                return candidate
        return None

    def resolve_member(self, member: str) -> str:
        """
        Finds the archive path holding a dist-info member.

        The computed path is tried first. When it is absent and fallback lookup
        is enabled, any dist-info directory whose name and version match the
        parsed filename is accepted, which covers producers that do not escape
        the distribution name.

        Raises:
            MemberNotFoundError: If no matching member exists.
        """
        path = self.member_path(member)
        if self.archive.has_member(path):
            return path
        if self.config.dist_info_fallback:
            found = self._find_member(member)
            if found is not None:
                _LOG.info("using %s in place of missing %s", found, path)
                return found
        raise MemberNotFoundError(path, str(self.archive.path) if self.archive.path else None)

    def read_member(self, member: str) -> bytes:
        return self.archive.read_member(self.resolve_member(member))

    def wheel_file(self) -> WheelFile:
        """Reads and parses the WHEEL manifest."""
        return WheelFile.parse(self.read_member(WHEEL), encoding=self.config.encoding)

    def record_file(self) -> RecordFile:
        """Reads and parses the RECORD manifest."""
        return RecordFile.parse(
            self.read_member(RECORD),
            encoding=self.config.encoding,
            separators=self.config.record_path_separators)

    def metadata_text(self) -> str:
        """
        Returns the METADATA document as text. The document is not parsed.
        """
        return self.read_member(METADATA).decode(self.config.encoding)

    def close(self) -> None:
        if self._owns_archive:
            self.archive.close()

    def __enter__(self) -> WheelReader:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
