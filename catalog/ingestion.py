"""
Ingestion — builds the initial product store from a raw catalog.

    raw file → read_products → deduplicate_products → ProductStore

Public API:
    ingest_records(records) → IngestionResult
    load_catalog(file_path) → IngestionResult
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from catalog.models import Product
from catalog.product_store import ProductStore
from processing.deduplicator import DuplicateRecord, deduplicate_products
from processing.product_reader import read_products

logger = logging.getLogger(__name__)


@dataclass
class IngestionResult:
    """The initialized store plus everything worth telling the user."""

    store: ProductStore = field(default_factory=ProductStore)
    duplicates: list[DuplicateRecord] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    source: str = ""


def ingest_records(records: list[dict]) -> IngestionResult:
    """Deduplicate raw records and load the survivors into a new store."""
    dedup = deduplicate_products(records)
    store = ProductStore(Product.from_raw(record) for record in dedup.records)
    return IngestionResult(store=store, duplicates=dedup.duplicates)


def load_catalog(file_path: Path | str) -> IngestionResult:
    """
    Read, deduplicate and store the catalog at *file_path*.

    A file that cannot be read yields an empty store and the read errors;
    records that could be read are still loaded.
    """
    read_result = read_products(file_path)
    result = ingest_records(read_result.records)
    result.errors = list(read_result.errors)
    result.source = read_result.source

    logger.info(
        f"Catalog '{result.source}' loaded: {len(result.store)} products, "
        f"{len(result.duplicates)} duplicates, {len(result.errors)} errors"
    )
    return result
