"""
Catalog view defaults and data-source configuration.

The products file defaults to the bundled sample catalog.  Override it with
PRODUCTS_FILE in .streamlit/secrets.toml or the PRODUCTS_FILE environment
variable.
"""

from pathlib import Path

# Initial sort column and direction for the product table.
DEFAULT_SORT_FIELD: str = "item"
DEFAULT_SORT_DIRECTION: str = "asc"

SORT_DIRECTIONS: set[str] = {"asc", "desc"}

# Rows-per-page choices offered by the pager.
PAGE_SIZE_OPTIONS: list[int] = [10, 25, 50, 100]
DEFAULT_PAGE_SIZE: int = 25

# Bundled sample catalog (contains one duplicate productId on purpose).
DEFAULT_PRODUCTS_PATH: Path = (
    Path(__file__).resolve().parent.parent / "data" / "products.json"
)

PRODUCTS_FILE_SETTING: str = "PRODUCTS_FILE"

# File extensions the product reader understands.
SUPPORTED_EXTENSIONS: set[str] = {".json", ".csv", ".xlsx"}
