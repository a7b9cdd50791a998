from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from packaging.tags import Tag, parse_tag
from packaging.utils import canonicalize_name
from packaging.version import Version

from wheelparse.helper.multiformat_serializable_mixin import MultiformatSerializableMixin
from wheelparse.helper.number_utils import parse_unsigned
from wheelparse.helper.version_utils import VersionGrammar, parse_version
from wheelparse.model.wheel.parse_errors import (
    InvalidBuildTagError,
    InvalidDistributionNameError,
    NotAWheelError,
    PartCountMismatchError,
)

_LOG = logging.getLogger(__name__)

WHEEL_SUFFIX = ".whl"

# Compiled once at import, read-only afterwards.
_NAME_RE = re.compile(r"[\w.]+")
_BUILD_TAG_RE = re.compile(r"(?P<number>[0-9]+)(?P<remainder>.*)", re.DOTALL)


def is_wheel_filename(filename: str) -> bool:
    """Returns True when `filename` carries the wheel suffix."""
    return filename.endswith(WHEEL_SUFFIX)


@dataclass(slots=True, frozen=True)
class BuildTag(MultiformatSerializableMixin):
    """
    The optional build tag of a wheel filename.

    A build tag starts with one or more digits and may continue with arbitrary
    text, e.g. "1" or "1asdf".

    Attributes:
        number (int): The leading digits as an unsigned integer.
        remainder (str | None): Whatever follows the digits, or None if nothing does.
    """
    number: int
    remainder: str | None = None

    @staticmethod
    def parse(token: str) -> BuildTag:
        """
        Parses a build tag token.

        The longest leading run of digits becomes `number`; the rest of the token
        becomes `remainder`.

        Args:
            token (str): The build tag field of a wheel filename.

        Returns:
            BuildTag: The parsed tag.

        Raises:
            InvalidBuildTagError: If the token does not start with a digit, or the
                number does not fit in an unsigned 64-bit integer.
        """
        m = _BUILD_TAG_RE.fullmatch(token)
        if m is None:
            raise InvalidBuildTagError(token)
        number = parse_unsigned(m.group("number"))
        if number is None:
            raise InvalidBuildTagError(token)
        return BuildTag(number=number, remainder=m.group("remainder") or None)

    def sort_key(self) -> tuple[int, str]:
        """
        Key that orders build tags numerically first, then lexically by remainder.
        """
        return self.number, self.remainder or ""

    def to_mapping(self) -> dict[str, Any]:
        m: dict[str, Any] = {"number": self.number}
        if self.remainder is not None:
            m["remainder"] = self.remainder
        return m


@dataclass(slots=True, frozen=True)
class WheelName(MultiformatSerializableMixin):
    """
    The validated components of a wheel filename.

    A wheel filename has the shape
    `{distribution}-{version}[-{build_tag}]-{python_tag}-{abi_tag}-{platform_tag}.whl`.
    The distribution is stored in its canonical form; the three compatibility
    tags are kept verbatim and may themselves be compressed tag sets joined
    with ".".

    Attributes:
        distribution (str): Canonical distribution name, e.g. "charset-normalizer".
        version (Version): The parsed version.
        build_tag (BuildTag | None): The build tag, if the filename has one.
        python_tag (str): The interpreter tag, e.g. "py3".
        abi_tag (str): The ABI tag, e.g. "none".
        platform_tag (str): The platform tag, e.g. "any".
        version_token (str): The version field exactly as written in the filename.
    """
    distribution: str
    version: Version
    build_tag: BuildTag | None
    python_tag: str
    abi_tag: str
    platform_tag: str
    version_token: str = field(default="", compare=False)

    @staticmethod
    def parse(filename: str, *, grammar: VersionGrammar = Version) -> WheelName:
        """
        Parses a wheel filename.

        The filename is split into its dash-separated fields before any field is
        validated, so a distribution name written with a dash shifts the fields
        and is reported as a version error rather than a name error.

        Args:
            filename (str): The bare filename, e.g. "requests-2.29.0-py3-none-any.whl".
            grammar (VersionGrammar, optional): The version grammar. Defaults to PEP 440.

        Returns:
            WheelName: The parsed filename.

        Raises:
            NotAWheelError: If the filename does not end with ".whl".
            PartCountMismatchError: If there are not exactly 5 or 6 fields.
            InvalidDistributionNameError: If the distribution field is malformed.
            InvalidVersionError: If the version field is rejected by the grammar.
            InvalidBuildTagError: If the build tag field is malformed.
        """
        if not is_wheel_filename(filename):
            raise NotAWheelError(filename)

        parts = filename[:-len(WHEEL_SUFFIX)].split("-")
        if len(parts) not in (5, 6):
            raise PartCountMismatchError(filename, len(parts))

        raw_name = parts[0]
        if "__" in raw_name or not _NAME_RE.fullmatch(raw_name):
            raise InvalidDistributionNameError(raw_name)

        version = parse_version(parts[1], grammar)

        if len(parts) == 6:
            build_tag = BuildTag.parse(parts[2])
            offset = 1
        else:
            build_tag = None
            offset = 0

        name = WheelName(
            distribution=canonicalize_name(raw_name),
            version=version,
            build_tag=build_tag,
            python_tag=parts[2 + offset],
            abi_tag=parts[3 + offset],
            platform_tag=parts[4 + offset],
            version_token=parts[1])
        _LOG.debug("parsed wheel filename %s as %s %s", filename, name.distribution, name.version)
        return name

    @property
    def tags(self) -> frozenset[Tag]:
        """
        Expands the compressed tag sets into the individual compatibility tags.

        For example "py2.py3-none-any" expands to the tags py2-none-any and
        py3-none-any.
        """
        return parse_tag(f"{self.python_tag}-{self.abi_tag}-{self.platform_tag}")

    @property
    def dist_info_dir(self) -> str:
        """
        Name of the dist-info directory inside the archive.

        Wheel producers write the distribution with underscores in place of
        dashes, e.g. "charset_normalizer-3.1.0.dist-info".
        A version produced by a grammar other than PEP 440 is written as it
        appeared in the filename.
        """
        version = self.version if isinstance(self.version, Version) else self.version_token
        return f"{self.distribution.replace('-', '_')}-{version}.dist-info"

    def dist_info_member(self, member: str) -> str:
        return f"{self.dist_info_dir}/{member}"

    def to_mapping(self) -> dict[str, Any]:
        m: dict[str, Any] = {
            "distribution": self.distribution,
            "version": str(self.version),
            "python_tag": self.python_tag,
            "abi_tag": self.abi_tag,
            "platform_tag": self.platform_tag,
        }
        if self.build_tag is not None:
            m["build_tag"] = self.build_tag.to_mapping()
        return m
