from __future__ import annotations

# Width of the unsigned integers carried by parsed records.
MAX_UNSIGNED = 2 ** 64 - 1


def parse_unsigned(text: str) -> int | None:
    """
    Parses an unsigned decimal integer made only of ASCII digits.

    Unlike `int()`, this rejects signs, surrounding whitespace, underscores and
    non-ASCII digits, and it rejects values wider than 64 bits.

    Args:
        text (str): The candidate number.

    Returns:
        int | None: The value, or None if `text` is not a valid unsigned integer.
    """
    if not text or not text.isascii() or not text.isdigit():
        return None
    value = int(text)
    return value if value <= MAX_UNSIGNED else None
