"""
Tests for utils/natural_sort.py

Covers: digit runs compared numerically, case-insensitive text, None
handling, and stability of natural_sorted.
"""

from utils.natural_sort import natural_sort_key, natural_sorted


class TestNaturalSortKey:
    def test_numeric_runs_compare_by_value(self):
        assert natural_sort_key("item2") < natural_sort_key("item10")

    def test_plain_numbers(self):
        assert natural_sort_key("9") < natural_sort_key("10")
        assert natural_sort_key("102") < natural_sort_key("1204")

    def test_text_is_case_insensitive(self):
        assert natural_sort_key("apple") == natural_sort_key("APPLE")

    def test_prices_order_numerically(self):
        assert natural_sort_key("$5.15") < natural_sort_key("$10.00")

    def test_prefix_sorts_first(self):
        assert natural_sort_key("item") < natural_sort_key("item2")

    def test_none_is_empty(self):
        assert natural_sort_key(None) == natural_sort_key("")


class TestNaturalSorted:
    def test_item_names(self):
        assert natural_sorted(["item2", "item10", "item1"]) == ["item1", "item2", "item10"]

    def test_reverse(self):
        assert natural_sorted(["2", "10", "1"], reverse=True) == ["10", "2", "1"]

    def test_equal_keys_keep_input_order(self):
        assert natural_sorted(["Ham", "ham", "HAM"]) == ["Ham", "ham", "HAM"]
