"""
Product record schema definitions.

Defines the raw field names used by catalog files, the attribute names used
by the Product dataclass, display labels, sortable columns, and the
human-readable messages for required fields.
"""

# Raw field names in the order they appear in catalog files.
# Every raw record handed to ingestion is a mapping keyed by these names.
RAW_FIELDS: list[str] = [
    "productSize",
    "item",
    "plu_upc",
    "price",
    "productId",
    "catId",
    "uom",
]

# Raw field name → Product attribute name.
FIELD_ATTRIBUTES: dict[str, str] = {
    "productId": "product_id",
    "item": "item",
    "price": "price",
    "catId": "cat_id",
    "uom": "uom",
    "productSize": "product_size",
    "plu_upc": "plu_upc",
}

# Product attribute name → raw field name.
ATTRIBUTE_FIELDS: dict[str, str] = {
    attr: raw for raw, attr in FIELD_ATTRIBUTES.items()
}

# Column labels shown in the table and used as Excel export headers.
# Order here is the display order.
DISPLAY_LABELS: dict[str, str] = {
    "product_id": "Product ID",
    "item": "Item Name",
    "price": "Price",
    "cat_id": "Category",
    "uom": "UOM",
    "product_size": "Product Size",
    "plu_upc": "PLU/UPC",
}

# Columns the table can be sorted by.
SORTABLE_FIELDS: list[str] = ["product_id", "item", "price", "cat_id", "uom"]

# Fields matched (case-insensitively, as substrings) by the search box.
SEARCHABLE_FIELDS: list[str] = ["item", "product_id", "price"]

# Required form fields (raw names) and the message shown when blank.
REQUIRED_FIELD_MESSAGES: dict[str, str] = {
    "item": "Product name is required",
    "price": "Price is required",
    "catId": "Category ID is required",
    "uom": "Unit of measure is required",
}

INVALID_PRICE_MESSAGE: str = "Price must be a valid number greater than 0"

# Form input labels (raw field name → label), in form order.
FORM_LABELS: dict[str, str] = {
    "item": "Product Name",
    "price": "Price",
    "catId": "Category ID",
    "uom": "Unit of Measure",
    "productSize": "Product Size",
    "plu_upc": "PLU/UPC",
}

# Placeholder hints for form inputs.
FORM_PLACEHOLDERS: dict[str, str] = {
    "price": "5.15",
    "uom": "LB, EA, CS",
}
