"""Parsers for the text artifacts of Python wheels: the filename, WHEEL, and RECORD."""

from importlib.metadata import PackageNotFoundError, version as get_version

from wheelparse.model.wheel import (
    BuildTag,
    Digest,
    RecordEntry,
    RecordFile,
    WheelFile,
    WheelName,
    WheelParseError,
)
from wheelparse.config import ParserConfig
from wheelparse.archive import WheelArchive, WheelReader
from wheelparse.model.wheel.wheelinfo_model import WheelInfo

try:
    __version__ = get_version("wheelparse")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "BuildTag",
    "Digest",
    "ParserConfig",
    "RecordEntry",
    "RecordFile",
    "WheelArchive",
    "WheelFile",
    "WheelInfo",
    "WheelName",
    "WheelParseError",
    "WheelReader"
]
