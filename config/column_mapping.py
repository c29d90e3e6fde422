"""
Column header mapping configuration.

Maps tabular (CSV / Excel) column headers to raw product field names.
Used by product_reader.py before records are handed to ingestion.
"""

# ---------------------------------------------------------------------------
# Exact matches: header (lowercase) → raw field name
# Headers that already use the raw field name, ignoring case.
# ---------------------------------------------------------------------------
EXACT_MATCHES: dict[str, str] = {
    "productid": "productId",
    "item": "item",
    "price": "price",
    "catid": "catId",
    "uom": "uom",
    "productsize": "productSize",
    "plu_upc": "plu_upc",
}

# ---------------------------------------------------------------------------
# Known renames: header (lowercase) → raw field name
# Human-friendly headers, including the labels our own export writes.
# ---------------------------------------------------------------------------
KNOWN_RENAMES: dict[str, str] = {
    "product id": "productId",
    "product_id": "productId",
    "id": "productId",
    "item name": "item",
    "product name": "item",
    "name": "item",
    "category": "catId",
    "category id": "catId",
    "cat_id": "catId",
    "unit of measure": "uom",
    "product size": "productSize",
    "product_size": "productSize",
    "size": "productSize",
    "plu/upc": "plu_upc",
    "plu": "plu_upc",
    "upc": "plu_upc",
}
