from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from typing_extensions import Self

from wheelparse.helper.toml_utils import load_toml_text


class MultiformatDeserializableMixin:
    """
    Builds instances from JSON, YAML, or TOML text.

    Subclasses implement `from_mapping()`. The text entrypoints decode the
    document, check that its root is a mapping, and hand it to `from_mapping()`.
    """

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], **_: Any) -> Self:
        """
        Creates an instance from a decoded mapping.

        Args:
            mapping (Mapping[str, Any]): The decoded document.

        Raises:
            NotImplementedError: If the subclass does not provide an implementation.
        """
        raise NotImplementedError(
            f"{cls.__name__} must implement from_mapping(mapping, **kwargs) "
            "to use MultiformatDeserializableMixin.")

    @classmethod
    def deserialize(cls, text: str, *, fmt: str = "json", **context: Any) -> Self:
        """
        Decodes `text` in the given format and builds an instance from it.

        Args:
            text (str): The serialized document.
            fmt (str, optional): One of "json", "yaml", or "toml". Defaults to "json".
            **context (Any): Passed through to `from_mapping()`.

        Returns:
            Self: The new instance.
        """
        raw = cls._parse_text(text, fmt=fmt)
        mapping = cls._coerce_root_mapping(raw, fmt=fmt, path=None)
        return cls.from_mapping(mapping, **context)

    @classmethod
    def from_json(cls, text: str, **context: Any) -> Self:
        return cls.deserialize(text, fmt="json", **context)

    @classmethod
    def from_yaml(cls, text: str, **context: Any) -> Self:
        return cls.deserialize(text, fmt="yaml", **context)

    @classmethod
    def from_toml(cls, text: str, **context: Any) -> Self:
        return cls.deserialize(text, fmt="toml", **context)

    @classmethod
    def from_file(cls, path: str | Path, fmt: str | None = None, **context: Any) -> Self:
        """
        Reads a document from disk and builds an instance from it.

        When `fmt` is not given, it is inferred from the file suffix.

        Args:
            path (str | Path): The file to read.
            fmt (str | None): Explicit format, or None to infer it.
            **context (Any): Passed through to `from_mapping()`.

        Returns:
            Self: The new instance.

        Raises:
            ValueError: If the format cannot be inferred or is not supported.
            TypeError: If the document root is not a mapping.
        """
        p = Path(path)
        fmt = fmt or cls._infer_format_from_suffix(p)
        raw = cls._parse_text(p.read_text(encoding="utf-8"), fmt=fmt)
        mapping = cls._coerce_root_mapping(raw, fmt=fmt, path=p)
        return cls.from_mapping(mapping, **context)

    @classmethod
    def _infer_format_from_suffix(cls, path: Path) -> str:
        suffix = path.suffix.lower()
        match suffix:
            case ".json":
                return "json"
            case ".yaml" | ".yml":
                return "yaml"
            case ".toml":
                return "toml"
            case _:
                raise ValueError(f"Cannot infer format from extension {suffix!r}")

    @classmethod
    def _parse_text(cls, text: str, *, fmt: str) -> Any:
        """
        Decodes text in one of the supported formats.

        Empty input decodes to an empty mapping in every format.

        Args:
            text (str): The serialized document.
            fmt (str): One of "json", "yaml", or "toml", case-insensitive.

        Returns:
            Any: The decoded document.

        Raises:
            RuntimeError: If the format is "yaml" and PyYAML is not installed.
            ValueError: If the format is not supported.
        """
        fmt = fmt.lower()
        match fmt:
            case "json":
                return json.loads(text or "{}")
            case "yaml":
                try:
                    import yaml
                except ImportError:
                    raise RuntimeError("PyYAML not installed")
                return next(iter(yaml.safe_load_all(text)), None) or {}
            case "toml":
                return load_toml_text(text or "")
            case _:
                raise ValueError(f"unrecognized format: {fmt!r}")

    @classmethod
    def _coerce_root_mapping(cls, raw: Any, *, fmt: str, path: Path | None) -> Mapping[str, Any]:
        if isinstance(raw, Mapping):
            return raw
        raise TypeError(
            f"{cls.__name__} expected top-level mapping, got {type(raw)!r} "
            f"from {fmt} {str(path) if path else '<inline>'}")
