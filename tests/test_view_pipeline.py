"""
Tests for analysis/view_pipeline.py

Covers: search + category filtering, numeric-aware stable sorting,
pagination past the end, category list, sort toggling, parameter
validation, idempotence, and the display DataFrame.
"""

from dataclasses import replace

import pytest

from analysis.view_pipeline import (
    ViewParams,
    ViewResult,
    derive_view,
    list_categories,
    next_sort_params,
    view_to_dataframe,
)
from catalog.models import Product


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_product(
    product_id: str,
    item: str,
    price: str = "$1.00",
    cat_id: str = "1",
    uom: str = "LB",
) -> Product:
    return Product(product_id=product_id, item=item, price=price, cat_id=cat_id, uom=uom)


def _ham_and_turkey() -> list[Product]:
    return [
        _make_product("1", "Ham", cat_id="1"),
        _make_product("2", "Turkey", cat_id="2"),
    ]


def _items(result: ViewResult) -> list[str]:
    return [product.item for product in result.rows]


# ═══════════════════════════════════════════════════════════════════════════
# Filter
# ═══════════════════════════════════════════════════════════════════════════

class TestFilter:
    def test_search_matches_item(self):
        result = derive_view(_ham_and_turkey(), ViewParams(search_text="ha"))
        assert _items(result) == ["Ham"]

    def test_search_is_case_insensitive(self):
        result = derive_view(_ham_and_turkey(), ViewParams(search_text="TURK"))
        assert _items(result) == ["Turkey"]

    def test_category_only(self):
        result = derive_view(_ham_and_turkey(), ViewParams(category="2"))
        assert _items(result) == ["Turkey"]

    def test_search_and_category_combined(self):
        result = derive_view(_ham_and_turkey(), ViewParams(search_text="ha", category="2"))
        assert result.rows == []
        assert result.total_matching == 0

    def test_empty_search_matches_all(self):
        result = derive_view(_ham_and_turkey(), ViewParams())
        assert result.total_matching == 2

    def test_search_matches_product_id(self):
        products = [_make_product("102", "Ham"), _make_product("210", "Turkey")]
        result = derive_view(products, ViewParams(search_text="02"))
        assert _items(result) == ["Ham"]

    def test_search_matches_price(self):
        products = [
            _make_product("1", "Ham", price="$5.15"),
            _make_product("2", "Turkey", price="$7.99"),
        ]
        result = derive_view(products, ViewParams(search_text="5.15"))
        assert _items(result) == ["Ham"]

    def test_does_not_search_other_fields(self):
        products = [_make_product("1", "Ham", uom="EA")]
        result = derive_view(products, ViewParams(search_text="ea"))
        assert result.rows == []


# ═══════════════════════════════════════════════════════════════════════════
# Sort
# ═══════════════════════════════════════════════════════════════════════════

class TestSort:
    def test_numeric_aware_names(self):
        products = [
            _make_product("a", "item2"),
            _make_product("b", "item10"),
            _make_product("c", "item1"),
        ]
        result = derive_view(products, ViewParams(sort_field="item"))
        assert _items(result) == ["item1", "item2", "item10"]

    def test_descending(self):
        products = [
            _make_product("a", "item2"),
            _make_product("b", "item10"),
            _make_product("c", "item1"),
        ]
        result = derive_view(products, ViewParams(sort_field="item", sort_direction="desc"))
        assert _items(result) == ["item10", "item2", "item1"]

    def test_product_id_numeric_aware(self):
        products = [_make_product(pid, f"p{pid}") for pid in ["1204", "102", "159", "11018"]]
        result = derive_view(products, ViewParams(sort_field="product_id"))
        assert [p.product_id for p in result.rows] == ["102", "159", "1204", "11018"]

    def test_price_numeric_aware(self):
        products = [
            _make_product("1", "a", price="$10.00"),
            _make_product("2", "b", price="$5.15"),
        ]
        result = derive_view(products, ViewParams(sort_field="price"))
        assert [p.price for p in result.rows] == ["$5.15", "$10.00"]

    @pytest.mark.parametrize("direction", ["asc", "desc"])
    def test_ties_keep_original_order(self, direction):
        products = [
            _make_product("3", "first", cat_id="1"),
            _make_product("1", "second", cat_id="1"),
            _make_product("2", "third", cat_id="1"),
        ]
        result = derive_view(
            products, ViewParams(sort_field="cat_id", sort_direction=direction)
        )
        assert _items(result) == ["first", "second", "third"]

    def test_input_not_modified(self):
        products = [_make_product("2", "b"), _make_product("1", "a")]
        derive_view(products, ViewParams(sort_field="item"))
        assert [p.item for p in products] == ["b", "a"]


# ═══════════════════════════════════════════════════════════════════════════
# Paginate
# ═══════════════════════════════════════════════════════════════════════════

class TestPaginate:
    def _thirty(self) -> list[Product]:
        return [_make_product(str(n), f"item{n}") for n in range(1, 31)]

    def test_last_full_page(self):
        params = ViewParams(sort_field="product_id", page=2, page_size=10)
        result = derive_view(self._thirty(), params)
        assert [p.product_id for p in result.rows] == [str(n) for n in range(21, 31)]
        assert result.total_matching == 30
        assert result.page_count == 3

    def test_page_past_end_is_empty(self):
        params = ViewParams(sort_field="product_id", page=3, page_size=10)
        result = derive_view(self._thirty(), params)
        assert result.rows == []
        assert result.total_matching == 30

    def test_partial_last_page(self):
        params = ViewParams(sort_field="product_id", page=1, page_size=25)
        result = derive_view(self._thirty(), params)
        assert len(result.rows) == 5
        assert result.page_count == 2

    def test_negative_page_is_empty(self):
        result = derive_view(self._thirty(), ViewParams(page=-1))
        assert result.rows == []

    def test_empty_store(self):
        result = derive_view([], ViewParams())
        assert result == ViewResult()


# ═══════════════════════════════════════════════════════════════════════════
# Outputs, purity, params
# ═══════════════════════════════════════════════════════════════════════════

class TestOutputs:
    def test_categories_from_unfiltered_collection(self):
        products = [
            _make_product("1", "a", cat_id="10"),
            _make_product("2", "b", cat_id="2"),
            _make_product("3", "c", cat_id="1"),
            _make_product("4", "d", cat_id="2"),
            _make_product("5", "e", cat_id=""),
        ]
        result = derive_view(products, ViewParams(category="2"))
        assert result.categories == ["1", "2", "10"]
        assert result.total_records == 5
        assert result.is_filtered

    def test_list_categories(self):
        assert list_categories(_ham_and_turkey()) == ["1", "2"]

    def test_idempotent(self):
        products = _ham_and_turkey()
        params = ViewParams(search_text="a", sort_direction="desc")
        assert derive_view(products, params) == derive_view(products, params)

    def test_view_to_dataframe(self):
        rows = [_make_product("2", "Turkey", price="$7.99", cat_id="2")]
        frame = view_to_dataframe(rows)
        assert list(frame.columns)[:5] == ["Product ID", "Item Name", "Price", "Category", "UOM"]
        assert frame.at[0, "Item Name"] == "Turkey"
        assert frame.at[0, "Price"] == "$7.99"

    def test_view_to_dataframe_empty(self):
        frame = view_to_dataframe([])
        assert frame.empty
        assert "Product ID" in frame.columns


class TestViewParams:
    def test_defaults(self):
        params = ViewParams()
        assert params.sort_field == "item"
        assert params.sort_direction == "asc"
        assert params.page == 0
        assert params.page_size == 25

    def test_unknown_sort_field(self):
        with pytest.raises(ValueError):
            ViewParams(sort_field="plu_upc")

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            ViewParams(sort_direction="up")

    def test_page_size_must_be_positive(self):
        with pytest.raises(ValueError):
            ViewParams(page_size=0)


class TestNextSortParams:
    def test_same_column_ascending_flips(self):
        params = next_sort_params(ViewParams(sort_field="item"), "item")
        assert params.sort_direction == "desc"

    def test_same_column_descending_returns_to_ascending(self):
        start = ViewParams(sort_field="item", sort_direction="desc")
        assert next_sort_params(start, "item").sort_direction == "asc"

    def test_other_column_sorts_ascending(self):
        start = ViewParams(sort_field="item", sort_direction="desc")
        params = next_sort_params(start, "price")
        assert params.sort_field == "price"
        assert params.sort_direction == "asc"

    def test_keeps_other_settings(self):
        start = ViewParams(search_text="ham", page=2)
        params = next_sort_params(start, "uom")
        assert params == replace(start, sort_field="uom", sort_direction="asc")
