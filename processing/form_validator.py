"""
Form validator — checks and normalizes one candidate product before commit.

Rules (all applied, violations collected rather than short-circuited):
  - item, catId, uom must be non-blank after trimming.
  - price must be non-blank, and must read as a number greater than zero
    once every character other than digits and "." is stripped.
  - productSize and plu_upc are unconstrained.

On success the price is rewritten to the canonical "$0.00" form.  In
"create" mode the product id is cleared so the store mints a fresh one;
in "edit" mode the id passed in is preserved.

Public API:
    validate_product(fields, mode, product_id) → ValidationResult
"""

import logging
from dataclasses import dataclass, field
from typing import Literal

from catalog.models import Product
from config.schema import INVALID_PRICE_MESSAGE, REQUIRED_FIELD_MESSAGES
from processing.price_normalizer import normalize_price

logger = logging.getLogger(__name__)

FormMode = Literal["create", "edit"]


# ═══════════════════════════════════════════════════════════════════════════
# Data classes
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class ValidationResult:
    """Either a normalized product or a field → message error map, never both."""

    product: Product | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.product is not None


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def validate_product(
    fields: dict,
    mode: FormMode = "create",
    product_id: str = "",
) -> ValidationResult:
    """
    Validate raw form fields and build the product to commit.

    Args:
        fields: Form values keyed by raw field name (item, price, catId,
                uom, productSize, plu_upc).  Missing keys count as blank.
        mode: "create" or "edit".
        product_id: Id of the product being edited.  Ignored in create mode,
                    as is any productId inside *fields*.

    Returns:
        ValidationResult with the normalized Product, or with errors keyed
        by raw field name.
    """
    if mode not in ("create", "edit"):
        raise ValueError(f"Unknown form mode '{mode}'")

    errors = _collect_errors(fields)
    if errors:
        logger.debug(f"Form rejected ({mode}): {sorted(errors)}")
        return ValidationResult(errors=errors)

    canonical_price = normalize_price(_text(fields, "price"))

    raw = dict(fields)
    raw["price"] = canonical_price
    raw["productId"] = product_id if mode == "edit" else ""

    return ValidationResult(product=Product.from_raw(raw))


# ═══════════════════════════════════════════════════════════════════════════
# Internal helpers
# ═══════════════════════════════════════════════════════════════════════════

def _collect_errors(fields: dict) -> dict[str, str]:
    errors: dict[str, str] = {}

    for name, message in REQUIRED_FIELD_MESSAGES.items():
        if not _text(fields, name).strip():
            errors[name] = message

    # Blank price already has its "required" message.
    if "price" not in errors and normalize_price(_text(fields, "price")) is None:
        errors["price"] = INVALID_PRICE_MESSAGE

    return errors


def _text(fields: dict, name: str) -> str:
    value = fields.get(name)
    return "" if value is None else str(value)
