from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from wheelparse.helper.toml_utils import dump_toml_to_str


def _normalize(value: Any) -> Any:
    """
    Converts a value produced by `to_mapping()` into plain, order-stable data.

    Paths become POSIX strings, enums become their values, mappings are sorted by
    their stringified keys, sets are sorted, and tuples become lists. Nested
    structures are handled recursively; anything else is returned unchanged.

    Args:
        value (Any): The value to normalize.

    Returns:
        Any: The normalized value.
    """
    match value:
        case Path():
            return value.as_posix()
        case Enum():
            return value.value
        case Mapping():
            return {
                str(k): _normalize(v)
                for k, v in sorted(value.items(), key=lambda kv: str(kv[0]))
            }
        case set() | frozenset():
            return sorted(_normalize(v) for v in value)
        case list() | tuple():
            return [_normalize(v) for v in value]
        case _:
            return value


def _sort_nested(obj: Any) -> Any:
    match obj:
        case dict():
            return {k: _sort_nested(obj[k]) for k in sorted(obj)}
        case list():
            return [_sort_nested(item) for item in obj]
        case _:
            return obj


class MultiformatSerializableMixin:
    """
    Adds JSON, YAML, and TOML export to parsed records.

    Subclasses implement `to_mapping()`; every output format is derived from that
    single mapping. Absent optional values must be left out of the mapping rather
    than set to None, because TOML cannot represent null.
    """

    def to_mapping(self, *args, **kwargs) -> Mapping[str, Any]:
        """
        Returns the record as a mapping of plain values.

        Raises:
            NotImplementedError: If the subclass does not provide an implementation.
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement to_mapping() "
            "to use MultiformatSerializableMixin serialization.")

    def fingerprint(self) -> str:
        """
        Computes a SHA-256 digest over the normalized mapping of this record.

        Two records that carry the same values produce the same fingerprint
        regardless of key or set ordering.

        Returns:
            str: The hexadecimal digest.
        """
        payload = json.dumps(
            _normalize(self.to_mapping()),
            sort_keys=True,
            separators=(",", ":")).encode("utf-8")
        return hashlib.sha256(payload).hexdigest()

    def to_json(self, *, indent=2) -> str:
        """
        Serializes the record to JSON with sorted keys.

        Args:
            indent (int): Indentation width. Defaults to 2.

        Returns:
            str: The JSON text.
        """
        return json.dumps(_normalize(self.to_mapping()), ensure_ascii=False, indent=indent, sort_keys=True)

    def to_yaml(self, *, indent=2) -> str:
        """
        Serializes the record to YAML.

        Args:
            indent (int): Indentation width. Defaults to 2.

        Returns:
            str: The YAML text.

        Raises:
            RuntimeError: If PyYAML is not installed.
        """
        try:
            import yaml
        except ImportError:
            raise RuntimeError("PyYAML not installed")
        return yaml.safe_dump(_normalize(self.to_mapping()), sort_keys=True, allow_unicode=True, indent=indent)

    def to_toml(self, *, indent=2) -> str:
        """
        Serializes the record to TOML with keys sorted at every level.

        Args:
            indent (int): Indentation width used for arrays. Defaults to 2.

        Returns:
            str: The TOML text.
        """
        return dump_toml_to_str(_sort_nested(_normalize(self.to_mapping())), indent)

    def serialize(self, *, fmt="json", indent=2) -> str:
        """
        Serializes the record in the requested format.

        Args:
            fmt (str): One of "json", "yaml", or "toml". Defaults to "json".
            indent (int): Indentation width. Defaults to 2.

        Returns:
            str: The serialized record.

        Raises:
            ValueError: If `fmt` is not a supported format.
        """
        match fmt:
            case "json":
                return self.to_json(indent=indent)
            case "yaml":
                return self.to_yaml(indent=indent)
            case "toml":
                return self.to_toml(indent=indent)
            case _:
                raise ValueError(f"unrecognized format: {fmt}")
