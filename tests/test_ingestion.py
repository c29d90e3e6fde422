"""
Tests for catalog/ingestion.py

Covers: building a store from raw records, loading the bundled sample
catalog, and falling back to an empty store on read errors.
"""

import json

from catalog.ingestion import IngestionResult, ingest_records, load_catalog
from config.catalog_config import DEFAULT_PRODUCTS_PATH


class TestIngestRecords:
    def test_duplicates_removed_before_store(self):
        records = [
            {"productId": "11018", "item": "DELI SWEET SLICE SMOKED HAM", "price": "$6.49"},
            {"productId": "11018", "item": "SUNDAY HOT HAM", "price": "$6.99"},
            {"productId": "102", "item": "DELUXE COOKED HAM", "price": " $5.15 "},
        ]
        result = ingest_records(records)
        products = result.store.list()
        assert [p.product_id for p in products] == ["11018", "102"]
        assert products[0].item == "DELI SWEET SLICE SMOKED HAM"
        assert products[1].price == "$5.15"
        assert [d.item for d in result.duplicates] == ["SUNDAY HOT HAM"]

    def test_empty(self):
        result = ingest_records([])
        assert len(result.store) == 0
        assert result.duplicates == []


class TestLoadCatalog:
    def test_bundled_sample(self):
        result = load_catalog(DEFAULT_PRODUCTS_PATH)
        products = result.store.list()
        ids = [p.product_id for p in products]

        assert result.errors == []
        assert result.source == "products.json"
        assert len(ids) == len(set(ids))
        assert [d.item for d in result.duplicates] == ["SUNDAY HOT HAM"]
        assert result.store.get("159").item == "DELUXE LOW-SODIUM COOKED HAM"

    def test_unreadable_file_gives_empty_store(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("not json", encoding="utf-8")
        result = load_catalog(path)
        assert len(result.store) == 0
        assert len(result.errors) == 1

    def test_partial_file_keeps_good_records(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps([{"productId": "1", "item": "Ham"}, 7]), encoding="utf-8")
        result = load_catalog(path)
        assert len(result.store) == 1
        assert len(result.errors) == 1

    def test_default_result(self):
        assert len(IngestionResult().store) == 0
