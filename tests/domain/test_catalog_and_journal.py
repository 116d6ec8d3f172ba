"""Unit tests for the Catalog and the Transaction Journal."""

from datetime import date, datetime, timezone

import pytest

from ims.domain.exceptions import NotFoundError, ValidationError
from ims.domain.model.catalog import Catalog
from ims.domain.model.journal import Journal
from ims.domain.model.product import ProductChanges, ProductDraft
from ims.domain.model.stock_transaction import MovementType, StockTransaction
from ims.domain.model.value_objects import DateRange, Quantity

NOW = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def _catalog() -> Catalog:
    catalog = Catalog()
    catalog.create("p1", ProductDraft("Blue Pen", "Stationery", "1.50", 10, 2, "Ballpoint"), NOW)
    catalog.create("p2", ProductDraft("Notebook", "Stationery", "3.00", 4, 5), NOW)
    catalog.create("p3", ProductDraft("Stapler", "Office", "9.99", 0, 1), NOW)
    return catalog


def _entry(entry_id: str, product_id: str, when: datetime, kind=MovementType.ADD, qty=1):
    return StockTransaction(entry_id, product_id, kind, Quantity(qty), when)


class TestCatalog:

    def test_list_keeps_insertion_order(self):
        assert [p.id for p in _catalog().list()] == ["p1", "p2", "p3"]

    def test_duplicate_id_rejected(self):
        catalog = _catalog()
        with pytest.raises(ValidationError, match="already exists"):
            catalog.create("p1", ProductDraft("Other", "X", "1"), NOW)

    def test_require_unknown_raises_not_found(self):
        with pytest.raises(NotFoundError, match="Product with ID 'nope' not found"):
            _catalog().require("nope")

    def test_get_unknown_returns_none(self):
        assert _catalog().get("nope") is None

    def test_update_merges_changes(self):
        catalog = _catalog()
        product = catalog.update("p2", ProductChanges(name="A4 Notebook"), NOW)
        assert product.name == "A4 Notebook"
        assert catalog.require("p2").name == "A4 Notebook"

    def test_delete_removes_product(self):
        catalog = _catalog()
        catalog.delete("p1")
        assert "p1" not in catalog
        assert len(catalog) == 2

    def test_delete_unknown_raises_not_found(self):
        with pytest.raises(NotFoundError):
            _catalog().delete("nope")

    def test_search_matches_name_and_description(self):
        catalog = _catalog()
        assert [p.id for p in catalog.search("pen")] == ["p1"]
        assert [p.id for p in catalog.search("BALLPOINT")] == ["p1"]

    def test_search_filters_by_category(self):
        assert [p.id for p in _catalog().search(category="Office")] == ["p3"]

    def test_categories_are_distinct(self):
        assert _catalog().categories() == ["Stationery", "Office"]


class TestJournal:

    def test_append_and_list(self):
        journal = Journal()
        journal.append(_entry("t1", "p1", NOW))
        journal.append(_entry("t2", "p2", NOW))
        assert [e.id for e in journal.list_all()] == ["t1", "t2"]
        assert len(journal) == 2

    def test_duplicate_id_rejected(self):
        journal = Journal([_entry("t1", "p1", NOW)])
        with pytest.raises(ValidationError, match="already recorded"):
            journal.append(_entry("t1", "p1", NOW))

    def test_list_by_product(self):
        journal = Journal([_entry("t1", "p1", NOW), _entry("t2", "p2", NOW), _entry("t3", "p1", NOW)])
        assert [e.id for e in journal.list_by_product("p1")] == ["t1", "t3"]

    def test_list_between_is_inclusive(self):
        journal = Journal([
            _entry("t1", "p1", datetime(2024, 1, 1, tzinfo=timezone.utc)),
            _entry("t2", "p1", datetime(2024, 1, 15, 23, 59, tzinfo=timezone.utc)),
            _entry("t3", "p1", datetime(2024, 2, 1, tzinfo=timezone.utc)),
        ])
        window = DateRange.from_dates(date(2024, 1, 1), date(2024, 1, 15))
        assert [e.id for e in journal.list_between(window)] == ["t1", "t2"]

    def test_list_between_none_returns_everything(self):
        journal = Journal([_entry("t1", "p1", NOW)])
        assert len(journal.list_between(None)) == 1

    def test_list_all_returns_a_copy(self):
        journal = Journal([_entry("t1", "p1", NOW)])
        journal.list_all().clear()
        assert len(journal) == 1

    def test_signed_quantity(self):
        assert _entry("t1", "p1", NOW, MovementType.SUBTRACT, 4).signed_quantity == -4
        assert _entry("t2", "p1", NOW, MovementType.ADD, 4).signed_quantity == 4

    def test_movement_type_parse(self):
        assert MovementType.parse("ADD") is MovementType.ADD
        with pytest.raises(ValidationError):
            MovementType.parse("remove")
