"""String comparison helpers."""

import re

_CHUNK_PATTERN = re.compile(r"(\d+)")


def _natural_key(value: str) -> list[tuple[int, int | str, str]]:
    """Split text into comparable chunks: numbers compare by value."""
    key: list[tuple[int, int | str, str]] = []
    for chunk in _CHUNK_PATTERN.split(value):
        if not chunk:
            continue
        if chunk.isdigit():
            key.append((0, int(chunk), chunk))
        else:
            key.append((1, chunk.casefold(), chunk))
    return key


def compare_natural(a: str, b: str) -> int:
    """Compare strings the way a human sorts them.

    Digit runs compare numerically ("Item 2" < "Item 10") and letters
    compare case-insensitively first, with case only breaking ties.

    Returns:
        Negative if a sorts first, 0 if equal, positive if b sorts first
    """
    key_a = _natural_key(a)
    key_b = _natural_key(b)
    primary_a = [chunk[:2] for chunk in key_a]
    primary_b = [chunk[:2] for chunk in key_b]
    if primary_a != primary_b:
        return -1 if primary_a < primary_b else 1
    if a == b:
        return 0
    # Lower case before upper case, as in locale collation
    return -1 if a.swapcase() < b.swapcase() else 1


def compare_values(a: object, b: object) -> int:
    """Three-way comparison of two mutually comparable values."""
    if a < b:  # type: ignore[operator]
        return -1
    if a > b:  # type: ignore[operator]
        return 1
    return 0
