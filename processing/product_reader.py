"""
Product reader — loads a raw product catalog from disk.

Supported formats:
  - .json  — an array of objects keyed by raw field names (the format the
             catalog has always shipped in).
  - .csv / .xlsx — one product per row.  Headers are mapped to raw field
             names with a three-step cascade: exact match, known rename,
             then fuzzy match (thefuzz, threshold 80).  Unmapped columns
             are dropped.

Every value is read as text so ids like "00123" keep their leading zeros.
Problems are reported in the result's errors list; nothing is raised.

Public API:
    read_products(file_path) → ProductReadResult
    map_header(header) → str | None
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from config.catalog_config import SUPPORTED_EXTENSIONS
from config.column_mapping import EXACT_MATCHES, KNOWN_RENAMES
from config.schema import RAW_FIELDS
from utils.fuzzy_match import best_match

logger = logging.getLogger(__name__)

_FIELD_CANDIDATES: dict[str, str] = {name.lower(): name for name in RAW_FIELDS}


# ═══════════════════════════════════════════════════════════════════════════
# Data classes
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class ProductReadResult:
    """Complete result of reading one catalog file."""

    records: list[dict] = field(default_factory=list)
    source: str = ""
    column_mapping: dict[str, str] = field(default_factory=dict)
    unmapped_columns: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def read_products(file_path: Path | str) -> ProductReadResult:
    """
    Read raw product records from a JSON, CSV or Excel file.

    Args:
        file_path: Path to the catalog file.

    Returns:
        ProductReadResult with raw records in file order, the header
        mapping used (tabular files only), and any errors encountered.
    """
    file_path = Path(file_path)
    result = ProductReadResult(source=file_path.name)

    if not file_path.exists():
        _fail(result, f"Catalog file '{file_path}' does not exist")
        return result

    suffix = file_path.suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        _fail(
            result,
            f"Unsupported catalog format '{suffix}' for '{file_path.name}' "
            f"(expected one of {sorted(SUPPORTED_EXTENSIONS)})",
        )
        return result

    if suffix == ".json":
        _read_json(file_path, result)
    else:
        _read_table(file_path, suffix, result)

    logger.info(
        f"Read {len(result.records)} product records from '{file_path.name}' "
        f"({len(result.errors)} errors)"
    )
    return result


def map_header(header: str) -> str | None:
    """
    Map one tabular header to a raw field name.

    Returns:
        The raw field name, or None if the header matches nothing.
    """
    normalized = header.strip().lower()

    if normalized in EXACT_MATCHES:
        return EXACT_MATCHES[normalized]

    if normalized in KNOWN_RENAMES:
        return KNOWN_RENAMES[normalized]

    raw_field, _score = best_match(normalized, _FIELD_CANDIDATES, threshold=80)
    return raw_field


# ═══════════════════════════════════════════════════════════════════════════
# Internal helpers
# ═══════════════════════════════════════════════════════════════════════════

def _read_json(file_path: Path, result: ProductReadResult) -> None:
    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        _fail(result, f"Cannot read '{file_path.name}': {exc}")
        return

    if not isinstance(payload, list):
        _fail(result, f"'{file_path.name}' must contain a JSON array of products")
        return

    for position, entry in enumerate(payload):
        if not isinstance(entry, dict):
            result.errors.append(
                f"{file_path.name} entry {position}: expected an object, "
                f"got {type(entry).__name__}"
            )
            continue
        result.records.append(entry)


def _read_table(file_path: Path, suffix: str, result: ProductReadResult) -> None:
    try:
        if suffix == ".csv":
            dataframe = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        else:
            dataframe = pd.read_excel(
                file_path, dtype=str, keep_default_na=False, engine="openpyxl"
            )
    except Exception as exc:
        _fail(result, f"Cannot open file '{file_path.name}': {exc}")
        return

    rename_map: dict[str, str] = {}
    for header in dataframe.columns:
        raw_field = map_header(str(header))
        if raw_field is None or raw_field in rename_map.values():
            result.unmapped_columns.append(str(header))
            logger.info(f"Dropping unmapped column '{header}'")
            continue
        rename_map[header] = raw_field

    result.column_mapping = {str(k): v for k, v in rename_map.items()}

    if "productId" not in rename_map.values():
        _fail(result, f"'{file_path.name}' has no product id column")
        return

    dataframe = dataframe[list(rename_map)].rename(columns=rename_map)
    result.records = dataframe.to_dict(orient="records")


def _fail(result: ProductReadResult, message: str) -> None:
    logger.error(message)
    result.errors.append(message)
