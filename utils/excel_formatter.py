"""
Excel formatter — writes the product catalog to a formatted workbook.

One sheet, "Products": bold blue header row, every product in the order
given, auto-filter over the data, frozen header, and column widths fitted
to content.  Headers use the table's display labels, so the file can be
read back by product_reader.

Public API:
    export_catalog(products, output_path) → Path
"""

import logging
from pathlib import Path
from typing import Sequence

import openpyxl
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from catalog.models import Product
from config.schema import DISPLAY_LABELS

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Constants
# ═══════════════════════════════════════════════════════════════════════════

SHEET_TITLE = "Products"

_HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
_HEADER_FONT = Font(color="FFFFFF", bold=True, size=11)
_NORMAL_FONT = Font(size=10)

_MAX_COL_WIDTH = 50
_MIN_COL_WIDTH = 8


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def export_catalog(products: Sequence[Product], output_path: Path | str) -> Path:
    """
    Write *products* to an .xlsx workbook.

    Every cell is written as text (ids and UPCs keep leading zeros).

    Args:
        products: Products in the row order wanted in the file.
        output_path: Where to save the workbook; parent dirs are created.

    Returns:
        The output path.
    """
    workbook = openpyxl.Workbook()
    worksheet = workbook.active
    worksheet.title = SHEET_TITLE

    columns = list(DISPLAY_LABELS)

    for col_idx, column in enumerate(columns, start=1):
        cell = worksheet.cell(row=1, column=col_idx, value=DISPLAY_LABELS[column])
        cell.fill = _HEADER_FILL
        cell.font = _HEADER_FONT
        cell.alignment = Alignment(horizontal="center")

    for row_idx, product in enumerate(products, start=2):
        for col_idx, column in enumerate(columns, start=1):
            cell = worksheet.cell(row=row_idx, column=col_idx, value=getattr(product, column))
            cell.font = _NORMAL_FONT
            cell.number_format = "@"

    last_col_letter = get_column_letter(len(columns))
    worksheet.auto_filter.ref = f"A1:{last_col_letter}{len(products) + 1}"
    worksheet.freeze_panes = "A2"

    _auto_fit_column_widths(worksheet)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(str(output_path))
    workbook.close()

    logger.info(f"Exported {len(products)} products to '{output_path}'")
    return output_path


# ═══════════════════════════════════════════════════════════════════════════
# Formatting helpers
# ═══════════════════════════════════════════════════════════════════════════

def _auto_fit_column_widths(worksheet) -> None:
    """Size each column to its longest value, clamped to sane bounds."""
    for column_cells in worksheet.columns:
        longest = max(
            (len(str(cell.value)) for cell in column_cells if cell.value is not None),
            default=0,
        )
        col_letter = get_column_letter(column_cells[0].column)
        worksheet.column_dimensions[col_letter].width = min(
            max(longest, _MIN_COL_WIDTH) + 2, _MAX_COL_WIDTH
        )
