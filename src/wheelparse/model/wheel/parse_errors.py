from __future__ import annotations


class WheelParseError(ValueError):
    """Base class for every error raised while parsing a wheel artifact."""


# --------------------------------------------------------------------------
# Wheel filename
# --------------------------------------------------------------------------

class WheelNameParseError(WheelParseError):
    """Raised when a wheel filename cannot be parsed."""


class NotAWheelError(WheelNameParseError):

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"provided file name does not end with .whl: {filename!r}")


class PartCountMismatchError(WheelNameParseError):

    def __init__(self, filename: str, count: int):
        self.filename = filename
        self.count = count
        super().__init__(
            f"wheel file name has {count} dash-separated parts, expected 5 or 6: {filename!r}")


class InvalidDistributionNameError(WheelNameParseError):

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"invalid distribution name: {name!r}")


class InvalidVersionError(WheelNameParseError):
    """
    Raised when the version field does not satisfy the version grammar.

    Attributes:
        reason (str): The diagnostic produced by the version grammar, verbatim.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class InvalidBuildTagError(WheelNameParseError):

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"invalid build tag: {tag!r}")


# --------------------------------------------------------------------------
# WHEEL manifest
# --------------------------------------------------------------------------

class WheelFileParseError(WheelParseError):
    """
    Raised when a WHEEL manifest cannot be parsed.

    Attributes:
        field (str): The snake_case name of the offending field.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class DuplicateFieldError(WheelFileParseError):

    def __init__(self, field: str):
        super().__init__(field, f"field appears more than once: {field}")


class InvalidFieldValueError(WheelFileParseError):

    def __init__(self, field: str, detail: str):
        self.detail = detail
        super().__init__(field, f"field {field} has an invalid value: {detail}")


class MissingFieldError(WheelFileParseError):

    def __init__(self, field: str):
        super().__init__(field, f"required field is missing: {field}")


# --------------------------------------------------------------------------
# RECORD manifest
# --------------------------------------------------------------------------

class RecordFileParseError(WheelParseError):
    """Raised when a RECORD manifest cannot be parsed."""


class MalformedDigestError(RecordFileParseError):

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"malformed digest (expected 'algorithm=value'): {value!r}")


class MalformedSizeError(RecordFileParseError):

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"malformed file size: {value!r}")


class RecordDecodeError(RecordFileParseError):
    """
    Wraps a failure of the tabular decoding layer: undecodable bytes, broken
    quoting, or a row that does not have exactly three columns.

    Attributes:
        detail (str): Description of the decoding failure.
        line (int | None): 1-based line number of the offending row, when known.
    """

    def __init__(self, detail: str, line: int | None = None):
        self.detail = detail
        self.line = line
        where = f" (line {line})" if line is not None else ""
        super().__init__(f"could not decode RECORD{where}: {detail}")
