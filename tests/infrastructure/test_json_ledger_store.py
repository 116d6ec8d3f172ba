"""Tests for the JSON file store, using pytest's tmp_path."""

import json
import os
from decimal import Decimal

import pytest

from ims.domain.exceptions import PersistenceError
from ims.domain.model.product import ProductDraft
from ims.domain.service.ledger_engine import LedgerEngine, SaleLineRequest
from ims.infrastructure.persistence.json_ledger_store import JsonLedgerStore
from tests.fakes import FakeClock, SequentialIds


def _engine(path):
    return LedgerEngine(JsonLedgerStore(path), clock=FakeClock(), id_factory=SequentialIds())


class TestInitialisation:

    def test_missing_file_is_created_empty(self, tmp_path):
        path = tmp_path / "nested" / "db.json"
        state = JsonLedgerStore(path).load()
        assert len(state.catalog) == 0
        assert json.loads(path.read_text()) == {
            "products": [],
            "transactions": [],
            "customers": [],
            "sales": [],
        }

    def test_empty_file_is_initialised(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text("  \n")
        JsonLedgerStore(path).load()
        assert json.loads(path.read_text())["products"] == []

    def test_invalid_json_starts_empty(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text("{not json")
        state = JsonLedgerStore(path).load()
        assert len(state.journal) == 0
        assert path.read_text() == "{not json"

    def test_missing_collections_default_to_empty(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text(json.dumps({"products": []}))
        state = JsonLedgerStore(path).load()
        assert state.sales == []
        assert state.customers == {}

    def test_malformed_record_raises(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text(json.dumps({"products": [{"id": "p1", "name": "X"}]}))
        with pytest.raises(PersistenceError, match="malformed"):
            JsonLedgerStore(path).load()

    @pytest.mark.parametrize(
        "field, value",
        [("price", "abc"), ("createdAt", 12345), ("createdAt", "yesterday")],
    )
    def test_bad_field_value_raises(self, tmp_path, field, value):
        record = {
            "id": "p1",
            "name": "Pen",
            "category": "Stationery",
            "price": "1.50",
            "quantity": 1,
            "createdAt": "2024-01-01T00:00:00Z",
        }
        record[field] = value
        path = tmp_path / "db.json"
        path.write_text(json.dumps({"products": [record]}))
        with pytest.raises(PersistenceError, match="malformed"):
            JsonLedgerStore(path).load()


class TestRoundTrip:

    def test_full_ledger_survives_restart(self, tmp_path):
        path = tmp_path / "db.json"
        engine = _engine(path)
        pen = engine.create_product(ProductDraft("Pen", "Stationery", "1.10", 10, 3, "Blue"))
        engine.post_stock_transaction(pen.id, "subtract", 2, "Damaged")
        engine.record_sale([SaleLineRequest(pen.id, 3)], discount_percent="12.5",
                           payment_method="card", customer_label="Ada")
        engine.add_customer("Ada", "ada@example.com", "555", 7)

        reloaded = JsonLedgerStore(path).load()

        product = reloaded.catalog.require(pen.id)
        assert product.quantity == 5
        assert product.price.amount == Decimal("1.10")
        assert product.description == "Blue"
        assert [e.notes for e in reloaded.journal] == ["Damaged", f"Sale {reloaded.sales[0].id}"]
        sale = reloaded.sales[0]
        assert sale.discount_percent == Decimal("12.5")
        assert sale.customer_label == "Ada"
        assert sale.total.amount == Decimal("2.89")
        assert [c.name for c in reloaded.customers.values()] == ["Ada"]

    def test_document_uses_camel_case_keys(self, tmp_path):
        path = tmp_path / "db.json"
        engine = _engine(path)
        engine.create_product(ProductDraft("Pen", "Stationery", "1.10", 10, 3))
        raw = json.loads(path.read_text())["products"][0]
        assert raw["minStockLevel"] == 3
        assert raw["price"] == "1.10"
        assert "createdAt" in raw and "updatedAt" in raw

    def test_accepts_zulu_timestamps(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text(json.dumps({
            "products": [{
                "id": "p1", "name": "Pen", "category": "S", "price": 1.5,
                "quantity": 2, "minStockLevel": 1,
                "createdAt": "2024-01-01T10:00:00.000Z",
            }],
        }))
        product = JsonLedgerStore(path).load().catalog.require("p1")
        assert product.created_at.utcoffset().total_seconds() == 0
        assert product.updated_at == product.created_at


class TestFailedWrite:

    def test_failed_write_keeps_previous_document(self, tmp_path, monkeypatch):
        path = tmp_path / "db.json"
        engine = _engine(path)
        pen = engine.create_product(ProductDraft("Pen", "Stationery", "1.00", 10))
        before = path.read_text()

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", broken_replace)
        with pytest.raises(PersistenceError, match="disk full"):
            engine.post_stock_transaction(pen.id, "subtract", 4)
        monkeypatch.undo()

        assert path.read_text() == before
        assert engine.snapshot().catalog.require(pen.id).quantity == 10
        assert [p.name for p in tmp_path.iterdir()] == ["db.json"]
