from .parse_errors import (
    DuplicateFieldError,
    InvalidBuildTagError,
    InvalidDistributionNameError,
    InvalidFieldValueError,
    InvalidVersionError,
    MalformedDigestError,
    MalformedSizeError,
    MissingFieldError,
    NotAWheelError,
    PartCountMismatchError,
    RecordDecodeError,
    RecordFileParseError,
    WheelFileParseError,
    WheelNameParseError,
    WheelParseError,
)
from .record_file_model import Digest, RecordEntry, RecordFile
from .wheel_file_model import WheelFile
from .wheel_name_model import BuildTag, WheelName, is_wheel_filename

__all__ = [
    "BuildTag",
    "Digest",
    "DuplicateFieldError",
    "InvalidBuildTagError",
    "InvalidDistributionNameError",
    "InvalidFieldValueError",
    "InvalidVersionError",
    "MalformedDigestError",
    "MalformedSizeError",
    "MissingFieldError",
    "NotAWheelError",
    "PartCountMismatchError",
    "RecordDecodeError",
    "RecordEntry",
    "RecordFile",
    "RecordFileParseError",
    "WheelFile",
    "WheelFileParseError",
    "WheelName",
    "WheelNameParseError",
    "WheelParseError",
    "is_wheel_filename"
]
