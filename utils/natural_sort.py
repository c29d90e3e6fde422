"""
Numeric-aware string ordering.

Runs of digits compare by numeric value and everything else compares
case-insensitively, so "item2" < "item10" and "$5.15" < "$10.00".
"""

import re

_DIGIT_RUN_PATTERN = re.compile(r"(\d+)")


def natural_sort_key(value: object) -> tuple:
    """
    Build a sort key that orders strings the way a person reads them.

    re.split with a capturing group always yields text at even positions
    and digit runs at odd positions, so keys of different strings stay
    comparable position by position.

    Args:
        value: Any value; None is treated as an empty string.

    Returns:
        Tuple alternating casefolded text chunks and integers.
    """
    text = "" if value is None else str(value)
    chunks = _DIGIT_RUN_PATTERN.split(text)
    return tuple(
        int(chunk) if position % 2 else chunk.casefold()
        for position, chunk in enumerate(chunks)
    )


def natural_sorted(values, reverse: bool = False) -> list:
    """Return *values* sorted with natural_sort_key (stable)."""
    return sorted(values, key=natural_sort_key, reverse=reverse)
