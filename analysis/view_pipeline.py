"""
View pipeline — derives the visible page of products from a store snapshot.

Pure function of (products, view parameters):
  1. Filter: search text is a case-insensitive substring of item, product
     id or price, AND the category is empty or equals cat_id.
  2. Sort: numeric-aware, case-insensitive string order on the chosen
     column, ascending or descending, stable for ties.
  3. Paginate: rows [page * page_size, page * page_size + page_size).
     A page past the end is simply empty; clamping is the caller's job.

Also reports the number of matching rows and the distinct categories of the
unfiltered collection for the category selector.

Public API:
    ViewParams
    derive_view(products, params) → ViewResult
    next_sort_params(params, field) → ViewParams
    list_categories(products) → list[str]
    view_to_dataframe(rows) → pd.DataFrame
"""

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Iterable, Sequence

import pandas as pd

from catalog.models import Product
from config.catalog_config import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_DIRECTION,
    DEFAULT_SORT_FIELD,
    SORT_DIRECTIONS,
)
from config.schema import DISPLAY_LABELS, SEARCHABLE_FIELDS, SORTABLE_FIELDS
from utils.natural_sort import natural_sort_key, natural_sorted

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Data classes
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ViewParams:
    """Transient filter / sort / page settings chosen in the UI."""

    search_text: str = ""
    category: str = ""
    sort_field: str = DEFAULT_SORT_FIELD
    sort_direction: str = DEFAULT_SORT_DIRECTION
    page: int = 0
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.sort_field not in SORTABLE_FIELDS:
            raise ValueError(
                f"Cannot sort by '{self.sort_field}' "
                f"(expected one of {SORTABLE_FIELDS})"
            )
        if self.sort_direction not in SORT_DIRECTIONS:
            raise ValueError(f"Unknown sort direction '{self.sort_direction}'")
        if self.page_size < 1:
            raise ValueError(f"Page size must be at least 1, got {self.page_size}")


@dataclass
class ViewResult:
    """Output of derive_view()."""

    rows: list[Product] = field(default_factory=list)
    total_matching: int = 0
    total_records: int = 0
    categories: list[str] = field(default_factory=list)
    page_count: int = 0

    @property
    def is_filtered(self) -> bool:
        return self.total_matching != self.total_records


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def derive_view(products: Sequence[Product], params: ViewParams) -> ViewResult:
    """
    Run filter → sort → paginate over a store snapshot.

    Args:
        products: Snapshot from ProductStore.list().  Not modified.
        params: Current view parameters.

    Returns:
        ViewResult with the page rows, match / total counts, the category
        list of the whole collection, and the number of pages.
    """
    matching = [
        product for product in products
        if _matches(product, params.search_text, params.category)
    ]

    ordered = sorted(
        matching,
        key=lambda product: natural_sort_key(getattr(product, params.sort_field)),
        reverse=params.sort_direction == "desc",
    )

    rows: list[Product] = []
    if params.page >= 0:
        start = params.page * params.page_size
        rows = ordered[start:start + params.page_size]

    result = ViewResult(
        rows=rows,
        total_matching=len(matching),
        total_records=len(products),
        categories=list_categories(products),
        page_count=math.ceil(len(matching) / params.page_size),
    )

    logger.debug(
        f"View derived: page {params.page} → {len(rows)} rows of "
        f"{result.total_matching} matching ({result.total_records} total)"
    )
    return result


def next_sort_params(params: ViewParams, sort_field: str) -> ViewParams:
    """
    Apply a column-header click.

    Clicking the column already sorted ascending flips it to descending;
    any other click sorts ascending by that column.
    """
    flip = params.sort_field == sort_field and params.sort_direction == "asc"
    return replace(
        params,
        sort_field=sort_field,
        sort_direction="desc" if flip else "asc",
    )


def list_categories(products: Iterable[Product]) -> list[str]:
    """Distinct non-empty category codes, in numeric-aware ascending order."""
    return natural_sorted({product.cat_id for product in products if product.cat_id})


def view_to_dataframe(rows: Sequence[Product]) -> pd.DataFrame:
    """
    Build a display DataFrame for one page, labelled for the table.

    Row order is kept exactly as given.
    """
    columns = list(DISPLAY_LABELS)
    dataframe = pd.DataFrame(
        [[getattr(product, column) for column in columns] for product in rows],
        columns=columns,
    )
    return dataframe.rename(columns=DISPLAY_LABELS)


# ═══════════════════════════════════════════════════════════════════════════
# Internal helpers
# ═══════════════════════════════════════════════════════════════════════════

def _matches(product: Product, search_text: str, category: str) -> bool:
    if category and product.cat_id != category:
        return False

    if not search_text:
        return True

    needle = search_text.casefold()
    return any(
        needle in getattr(product, column).casefold()
        for column in SEARCHABLE_FIELDS
    )
