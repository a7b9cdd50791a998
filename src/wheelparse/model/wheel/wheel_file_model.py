from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from packaging.tags import Tag, parse_tag

from wheelparse.helper.multiformat_serializable_mixin import MultiformatSerializableMixin
from wheelparse.helper.number_utils import parse_unsigned
from wheelparse.model.wheel.parse_errors import (
    DuplicateFieldError,
    InvalidFieldValueError,
    MissingFieldError,
)

_LOG = logging.getLogger(__name__)

# --------------------------------------------------------------------------
# Recognized WHEEL lines: prefix -> (field name, multivalued?)
# Prefixes are case-sensitive; lines matching none of them are ignored.
# --------------------------------------------------------------------------
FieldSelector = tuple[str, bool]

WHEEL_FIELDS: dict[str, FieldSelector] = {
    "Wheel-Version: ": ("wheel_version", False),
    "Generator: ": ("generator", False),
    "Root-Is-Purelib: ": ("root_is_purelib", False),
    "Tag: ": ("tags", True),
    "Build: ": ("build", False),
}

REQUIRED_FIELDS = ("wheel_version", "generator", "root_is_purelib")

_BOOLEANS = {"true": True, "false": False}


def _convert(field: str, value: str) -> Any:
    match field:
        case "root_is_purelib":
            if value not in _BOOLEANS:
                raise InvalidFieldValueError(field, f"expected 'true' or 'false', got {value!r}")
            return _BOOLEANS[value]
        case "build":
            number = parse_unsigned(value)
            if number is None:
                raise InvalidFieldValueError(field, f"expected an unsigned integer, got {value!r}")
            return number
        case _:
            return value


@dataclass(slots=True, frozen=True)
class WheelFile(MultiformatSerializableMixin):
    """
    The contents of a wheel's `.dist-info/WHEEL` manifest.

    Attributes:
        wheel_version (str): Version of the wheel format, e.g. "1.0".
        generator (str): Name and version of the tool that built the wheel.
        root_is_purelib (bool): Whether the archive root belongs in purelib.
        tags (tuple[str, ...]): Compatibility tags in the order they were declared.
        build (int | None): The build number, if declared.
    """
    wheel_version: str
    generator: str
    root_is_purelib: bool
    tags: tuple[str, ...] = ()
    build: int | None = None

    @staticmethod
    def parse(text: str | bytes, *, encoding: str = "utf-8") -> WheelFile:
        """
        Parses a WHEEL manifest.

        Each line is matched against the prefixes in `WHEEL_FIELDS`. Single-valued
        fields may appear once; `Tag` lines accumulate in order. Unknown lines are
        skipped so that fields added by later versions of the format do not break
        parsing.

        Args:
            text (str | bytes): The manifest contents.
            encoding (str, optional): Encoding used when `text` is bytes.

        Returns:
            WheelFile: The parsed manifest.

        Raises:
            DuplicateFieldError: If a single-valued field appears twice.
            InvalidFieldValueError: If `Root-Is-Purelib` or `Build` has a malformed
                value, or if the bytes cannot be decoded.
            MissingFieldError: If a required field never appears.
        """
        if isinstance(text, bytes):
            try:
                text = text.decode(encoding)
            except UnicodeDecodeError as e:
                raise InvalidFieldValueError("document", str(e)) from e

        values: dict[str, Any] = {}
        tags: list[str] = []
        # only "\n" and "\r\n" end a line; other control characters belong to the value
        for line in text.split("\n"):
            line = line.removesuffix("\r")
            for prefix, (field, multi) in WHEEL_FIELDS.items():
                if not line.startswith(prefix):
                    continue
                value = line[len(prefix):]
                if multi:
                    tags.append(value)
                elif field in values:
                    raise DuplicateFieldError(field)
                else:
                    values[field] = _convert(field, value)
                break

        for field in REQUIRED_FIELDS:
            if field not in values:
                raise MissingFieldError(field)

        wheel_file = WheelFile(
            wheel_version=values["wheel_version"],
            generator=values["generator"],
            root_is_purelib=values["root_is_purelib"],
            tags=tuple(tags),
            build=values.get("build"))
        _LOG.debug("parsed WHEEL manifest from %s with %d tag(s)", wheel_file.generator, len(tags))
        return wheel_file

    def parsed_tags(self) -> list[Tag]:
        """
        Expands the declared tags into `packaging` tags, keeping declaration order.

        A compressed tag set on a single line is expanded in sorted order.
        """
        out: list[Tag] = []
        for tag in self.tags:
            out.extend(sorted(parse_tag(tag), key=str))
        return out

    @property
    def wheel_version_info(self) -> tuple[int, int] | None:
        """
        The wheel format version as (major, minor), or None if it is not of the
        form "N.M".
        """
        major, sep, minor = self.wheel_version.partition(".")
        if not sep:
            return None
        major_n, minor_n = parse_unsigned(major), parse_unsigned(minor)
        if major_n is None or minor_n is None:
            return None
        return major_n, minor_n

    def to_mapping(self) -> dict[str, Any]:
        m: dict[str, Any] = {
            "wheel_version": self.wheel_version,
            "generator": self.generator,
            "root_is_purelib": self.root_is_purelib,
            "tags": list(self.tags),
        }
        if self.build is not None:
            m["build"] = self.build
        return m
