from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from appdirs import user_config_dir
from typing_extensions import Self

from wheelparse.helper.multiformat_deserializable_mixin import MultiformatDeserializableMixin
from wheelparse.helper.multiformat_serializable_mixin import MultiformatSerializableMixin

_LOG = logging.getLogger(__name__)

APP_NAME = "wheelparse"
CONFIG_FILENAME = "config.toml"


def default_config_path() -> Path:
    """Location of the per-user configuration file."""
    return Path(user_config_dir(APP_NAME)) / CONFIG_FILENAME


def _typed(mapping: Mapping[str, Any], key: str, typ: type, default: Any) -> Any:
    value = mapping.get(key, default)
    # bool is an int subclass; keep the two apart
    if not isinstance(value, typ) or (typ is int and isinstance(value, bool)):
        raise ValueError(f"{key} must be of type {typ.__name__}, got {type(value).__name__}")
    return value


@dataclass(slots=True, frozen=True, kw_only=True)
class ParserConfig(MultiformatSerializableMixin, MultiformatDeserializableMixin):
    """
    Settings for reading wheel archives.

    The parsers themselves take these values as keyword arguments; this object
    carries them from a configuration file to the archive reader.

    Attributes:
        encoding (str): Encoding of text members inside the archive.
        member_cache_size (int): Number of member reads kept in the LRU cache.
        dist_info_fallback (bool): Whether to search the archive for a matching
            dist-info directory when the computed one is absent.
        record_path_separators (str): Characters accepted as a leading path
            separator in RECORD paths.
    """
    encoding: str = "utf-8"
    member_cache_size: int = 32
    dist_info_fallback: bool = True
    record_path_separators: str = "/"

    def __post_init__(self) -> None:
        if self.member_cache_size < 1:
            raise ValueError(f"member_cache_size must be positive, got {self.member_cache_size}")
        if not self.record_path_separators:
            raise ValueError("record_path_separators must not be empty")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], **_: Any) -> Self:
        """
        Builds a config from a mapping, ignoring keys it does not know.

        A `[wheelparse]` table is used when present, so the settings can live in
        a shared TOML file.

        Args:
            mapping (Mapping[str, Any]): Decoded configuration document.

        Returns:
            ParserConfig: The configuration.

        Raises:
            ValueError: If a known key has a value of the wrong type.
        """
        section = mapping.get(APP_NAME, mapping)
        if not isinstance(section, Mapping):
            raise ValueError(f"[{APP_NAME}] must be a table")
        defaults = cls()
        return cls(
            encoding=_typed(section, "encoding", str, defaults.encoding),
            member_cache_size=_typed(section, "member_cache_size", int, defaults.member_cache_size),
            dist_info_fallback=_typed(section, "dist_info_fallback", bool, defaults.dist_info_fallback),
            record_path_separators=_typed(
                section, "record_path_separators", str, defaults.record_path_separators))

    @classmethod
    def load(cls, path: str | Path | None = None) -> Self:
        """
        Loads the configuration from `path`, or from the per-user config file.

        With an explicit path the file must exist. Without one, the per-user file
        is read when it exists and the defaults are returned otherwise.

        Args:
            path (str | Path | None): Configuration file to read.

        Returns:
            ParserConfig: The configuration.
        """
        if path is not None:
            return cls.from_file(path)
        p = default_config_path()
        if p.is_file():
            _LOG.debug("loading configuration from %s", p)
            return cls.from_file(p)
        return cls()

    def to_mapping(self) -> dict[str, Any]:
        return {
            "encoding": self.encoding,
            "member_cache_size": self.member_cache_size,
            "dist_info_fallback": self.dist_info_fallback,
            "record_path_separators": self.record_path_separators,
        }
