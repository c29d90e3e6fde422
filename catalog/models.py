"""
Product record type shared by the store, the validator and the view pipeline.
"""

import math
from dataclasses import asdict, dataclass, replace

from config.schema import ATTRIBUTE_FIELDS, FIELD_ATTRIBUTES


@dataclass(frozen=True)
class Product:
    """One catalog entry.  Frozen so store snapshots cannot be edited."""

    product_id: str = ""
    item: str = ""
    price: str = ""
    cat_id: str = ""
    uom: str = ""
    product_size: str = ""
    plu_upc: str = ""

    @classmethod
    def from_raw(cls, raw: dict) -> "Product":
        """
        Build a Product from a raw, camelCase-keyed mapping.

        Missing keys become "", None/NaN become "", other values are
        converted with str() and stripped of surrounding whitespace.
        The price is kept as given; only the form validator rewrites it.
        """
        values = {
            attr: _clean_text(raw.get(raw_name))
            for raw_name, attr in FIELD_ATTRIBUTES.items()
        }
        return cls(**values)

    def to_raw(self) -> dict[str, str]:
        """Return the record keyed by raw field names."""
        return {
            ATTRIBUTE_FIELDS[attr]: value
            for attr, value in asdict(self).items()
        }

    def with_id(self, product_id: str) -> "Product":
        return replace(self, product_id=product_id)


def _clean_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value).strip()
