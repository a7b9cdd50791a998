from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import tomli
import tomli_w


def load_toml_text(text: str) -> dict[str, Any]:
    """
    Decodes TOML text into a dictionary.

    Args:
        text (str): TOML source text.

    Returns:
        dict[str, Any]: The decoded TOML document.
    """
    return tomli.loads(text)


def dump_toml_to_str(data: Mapping[str, Any], indent: int = 2) -> str:
    """
    Encodes a mapping as TOML text.

    TOML has no null value, so callers are expected to drop absent values from
    `data` before calling this function.

    Args:
        data (Mapping[str, Any]): The mapping to encode.
        indent (int, optional): Indentation used for arrays. Defaults to 2.

    Returns:
        str: The TOML document.
    """
    return tomli_w.dumps(data, indent=indent)
