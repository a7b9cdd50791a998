from __future__ import annotations

import logging
import threading
import zipfile
from operator import attrgetter
from pathlib import Path

from cachetools import LRUCache, cachedmethod

from wheelparse.config.parser_config_model import ParserConfig

_LOG = logging.getLogger(__name__)


class WheelArchiveError(Exception):
    pass


class MemberNotFoundError(WheelArchiveError):

    def __init__(self, member: str, archive: str | None = None):
        self.member = member
        self.archive = archive
        where = f" in {archive}" if archive else ""
        super().__init__(f"archive member not found{where}: {member}")


class WheelArchive:
    """
    Random-access reader over the members of a wheel (zip) archive.

    Member reads are cached in a bounded LRU cache, so repeated lookups of the
    same dist-info file do not decompress it again.
    The cache is guarded by a lock, so one archive may be shared between threads.

    Attributes:
        path (Path | None): Location of the archive on disk, when known.
        config (ParserConfig): Settings for decoding and caching.
    """

    def __init__(self, zf: zipfile.ZipFile, *, config: ParserConfig | None = None, path: Path | None = None):
        self._zf = zf
        self.path = path
        self.config = config or ParserConfig()
        self._cache: LRUCache = LRUCache(maxsize=self.config.member_cache_size)
        self._lock = threading.Lock()

    @classmethod
    def open(cls, path: str | Path, *, config: ParserConfig | None = None) -> WheelArchive:
        """
        Opens a wheel archive from disk.

        Args:
            path (str | Path): The archive file.
            config (ParserConfig | None): Settings; defaults are used when None.

        Returns:
            WheelArchive: The opened archive. Close it, or use it as a context manager.

        Raises:
            FileNotFoundError: If the file does not exist.
            WheelArchiveError: If the file is not a zip archive.
        """
        p = Path(path)
        try:
            zf = zipfile.ZipFile(p)
        except zipfile.BadZipFile as e:
            raise WheelArchiveError(f"not a zip archive: {p}") from e
        _LOG.debug("opened wheel archive %s", p)
        return cls(zf, config=config, path=p)

    def names(self) -> list[str]:
        return self._zf.namelist()

    def has_member(self, member: str) -> bool:
        try:
            self._zf.getinfo(member)
        except KeyError:
            return False
        return True

    @cachedmethod(attrgetter("_cache"), lock=attrgetter("_lock"))
    def read_member(self, member: str) -> bytes:
        """
        Returns the raw bytes of an archive member.

        Args:
            member (str): Archive-relative member path.

        Returns:
            bytes: The member contents.

        Raises:
            MemberNotFoundError: If the archive has no such member.
        """
        try:
            data = self._zf.read(member)
        except KeyError as e:
            raise MemberNotFoundError(member, str(self.path) if self.path else None) from e
        _LOG.debug("read %d bytes from member %s", len(data), member)
        return data

    def read_text(self, member: str) -> str:
        """
        Returns an archive member decoded with the configured encoding.

        Raises:
            MemberNotFoundError: If the archive has no such member.
            UnicodeDecodeError: If the member is not valid text in that encoding.
        """
        return self.read_member(member).decode(self.config.encoding)

    def close(self) -> None:
        with self._lock:
            self._cache.clear()
        self._zf.close()

    def __enter__(self) -> WheelArchive:
        return self

    def __exit__(self, *exc) -> None:
        self.close()
