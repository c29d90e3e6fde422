"""
Price normalizer — parses free-text prices and renders the canonical form.

Every character that is not a digit or a decimal point is stripped, then the
longest leading decimal number is read (so "1.2.3" reads as 1.2, the same
prefix rule a browser's parseFloat applies).  Canonical output is "$" plus
the value rounded half-up to two decimals.

Public API:
    parse_price(raw) → Decimal | None
    format_price(value) → str
    normalize_price(raw) → str | None
"""

import logging
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext

logger = logging.getLogger(__name__)

_NON_NUMERIC_PATTERN = re.compile(r"[^0-9.]")
_LEADING_NUMBER_PATTERN = re.compile(r"\d+(?:\.\d*)?|\.\d+")

_CENTS = Decimal("0.01")


def parse_price(raw: str | None) -> Decimal | None:
    """
    Read a numeric price out of free text.

    Args:
        raw: Text such as "  $5.155 ", "5.1" or "abc".

    Returns:
        The parsed Decimal, or None when no number can be read.
    """
    if raw is None:
        return None

    cleaned = _NON_NUMERIC_PATTERN.sub("", str(raw))
    match = _LEADING_NUMBER_PATTERN.match(cleaned)
    if match is None:
        logger.debug(f"No number in price '{raw}'")
        return None

    return Decimal(match.group(0))


def format_price(value: Decimal) -> str:
    """Render *value* as "$" + two decimals, rounding half-up."""
    # quantize needs room for every integer digit, a rounding carry and cents.
    with localcontext() as context:
        context.prec = max(context.prec, value.adjusted() + 4)
        return f"${value.quantize(_CENTS, rounding=ROUND_HALF_UP)}"


def normalize_price(raw: str | None) -> str | None:
    """
    Parse and format in one step.

    Returns:
        Canonical price string, or None if *raw* holds no number greater
        than zero.
    """
    value = parse_price(raw)
    if value is None or value <= 0:
        return None
    return format_price(value)
