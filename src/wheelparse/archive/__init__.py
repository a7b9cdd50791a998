from .wheel_archive import MemberNotFoundError, WheelArchive, WheelArchiveError
from .wheel_reader import DIST_INFO_MEMBERS, METADATA, RECORD, WHEEL, WheelReader

__all__ = [
    "DIST_INFO_MEMBERS",
    "METADATA",
    "MemberNotFoundError",
    "RECORD",
    "WHEEL",
    "WheelArchive",
    "WheelArchiveError",
    "WheelReader"
]
