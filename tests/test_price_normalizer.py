"""
Tests for processing/price_normalizer.py

Covers: currency / whitespace stripping, leading-number parsing, half-up
rounding to cents, and rejection of zero and non-numeric input.
"""

from decimal import Decimal

import pytest

from processing.price_normalizer import format_price, normalize_price, parse_price


# ═══════════════════════════════════════════════════════════════════════════
# Parsing
# ═══════════════════════════════════════════════════════════════════════════

class TestParsePrice:
    def test_plain_number(self):
        assert parse_price("5.15") == Decimal("5.15")

    def test_dollar_and_whitespace(self):
        assert parse_price(" $5.15 ") == Decimal("5.15")

    def test_thousands_separator_removed(self):
        assert parse_price("$1,250.00") == Decimal("1250.00")

    def test_only_leading_number_is_read(self):
        assert parse_price("1.2.3") == Decimal("1.2")

    def test_leading_decimal_point(self):
        assert parse_price(".5") == Decimal(".5")

    def test_minus_sign_is_stripped(self):
        assert parse_price("-5") == Decimal("5")

    @pytest.mark.parametrize("raw", ["abc", "", ".", "$", None])
    def test_no_number(self, raw):
        assert parse_price(raw) is None


# ═══════════════════════════════════════════════════════════════════════════
# Formatting
# ═══════════════════════════════════════════════════════════════════════════

class TestFormatPrice:
    def test_pads_to_two_decimals(self):
        assert format_price(Decimal("5.1")) == "$5.10"

    def test_rounds_half_up(self):
        assert format_price(Decimal("5.155")) == "$5.16"
        assert format_price(Decimal("2.345")) == "$2.35"

    def test_whole_number(self):
        assert format_price(Decimal("3")) == "$3.00"


class TestNormalizePrice:
    def test_canonical_form(self):
        assert normalize_price("5.15") == "$5.15"

    def test_padded_input(self):
        assert normalize_price("  $5.155 ") == "$5.16"

    def test_zero_rejected(self):
        assert normalize_price("0.00") is None

    def test_rounds_to_zero_still_positive(self):
        # 0.001 is greater than zero even though it displays as $0.00
        assert normalize_price("0.001") == "$0.00"

    def test_text_rejected(self):
        assert normalize_price("abc") is None

    def test_long_integer_part_kept_exact(self):
        assert normalize_price("1" * 30) == "$" + "1" * 30 + ".00"
        assert normalize_price("9" * 27 + ".995") == "$1" + "0" * 27 + ".00"
