"""
Deduplicator — drops raw records whose productId was already seen.

Runs once over the raw catalog before the store is built.  The first record
for each productId wins; every later one is discarded and reported as a
warning.  Warnings are advisory and never stop processing.

Ids are compared the way the store will hold them (stripped strings), so
" 102" and "102" count as the same product.

Public API:
    deduplicate_products(records) → DedupResult
"""

import logging
from dataclasses import dataclass, field

from catalog.models import Product

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Data classes
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class DuplicateRecord:
    """A raw record discarded because its productId appeared earlier."""

    product_id: str
    item: str
    position: int


@dataclass
class DedupResult:
    """Output of the deduplicate_products() function."""

    records: list[dict] = field(default_factory=list)
    duplicates: list[DuplicateRecord] = field(default_factory=list)


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def deduplicate_products(records: list[dict]) -> DedupResult:
    """
    Remove records that repeat an earlier productId, keeping input order.

    Args:
        records: Raw product mappings in file order.

    Returns:
        DedupResult with the surviving records (same dict objects, same
        order) and one DuplicateRecord per discarded record.
    """
    result = DedupResult()
    seen_ids: set[str] = set()

    for position, record in enumerate(records):
        cleaned = Product.from_raw(record)

        if cleaned.product_id in seen_ids:
            logger.warning(
                f'Duplicate productId found: {cleaned.product_id} - "{cleaned.item}"'
            )
            result.duplicates.append(DuplicateRecord(
                product_id=cleaned.product_id,
                item=cleaned.item,
                position=position,
            ))
            continue

        seen_ids.add(cleaned.product_id)
        result.records.append(record)

    logger.info(
        f"Deduplication complete: {len(result.records)} kept, "
        f"{len(result.duplicates)} duplicates dropped"
    )

    return result
