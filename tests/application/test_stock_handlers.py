"""Integration tests for posting and listing stock transactions."""

from datetime import date

import pytest

from ims.application.add_product import AddProductHandler
from ims.application.list_transactions import ListTransactionsHandler
from ims.application.post_stock_transaction import PostStockTransactionHandler
from ims.domain.exceptions import InsufficientStockError, NotFoundError, ValidationError
from ims.domain.model.value_objects import DateRange
from tests.fakes import FakeClock, make_engine


def _setup():
    clock = FakeClock()
    engine = make_engine(clock=clock)
    product = AddProductHandler(engine).handle("Widget", "Tools", "2.00", 10, 5)
    return engine, clock, product


class TestPostStockTransaction:

    def test_subtract_with_warning(self):
        engine, _, product = _setup()
        dto = PostStockTransactionHandler(engine).handle(product.id, "subtract", "7", "Shrinkage")
        assert dto.transaction.type == "subtract"
        assert dto.transaction.quantity == 7
        assert dto.transaction.product_name == "Widget"
        assert dto.transaction.notes == "Shrinkage"
        assert dto.product.quantity == 3
        assert dto.warning == "Low stock alert: Widget has only 3 units left (minimum 5)"

    def test_add_without_warning(self):
        engine, _, product = _setup()
        dto = PostStockTransactionHandler(engine).handle(product.id, "add", 5)
        assert dto.product.quantity == 15
        assert dto.warning is None

    def test_insufficient_stock(self):
        engine, _, product = _setup()
        with pytest.raises(InsufficientStockError):
            PostStockTransactionHandler(engine).handle(product.id, "subtract", 11)

    def test_unknown_product(self):
        engine, _, _ = _setup()
        with pytest.raises(NotFoundError):
            PostStockTransactionHandler(engine).handle("missing", "add", 1)

    def test_invalid_type(self):
        engine, _, product = _setup()
        with pytest.raises(ValidationError):
            PostStockTransactionHandler(engine).handle(product.id, None, 1)


class TestListTransactions:

    def test_filters_by_product_and_date(self):
        engine, clock, widget = _setup()
        gadget = AddProductHandler(engine).handle("Gadget", "Tools", "1.00", 3)
        post = PostStockTransactionHandler(engine)
        post.handle(widget.id, "add", 1)
        clock.advance(days=2)
        post.handle(gadget.id, "subtract", 1)
        post.handle(widget.id, "subtract", 2)

        handler = ListTransactionsHandler(engine)
        assert len(handler.handle()) == 3
        assert [t.quantity for t in handler.handle(product_id=widget.id)] == [1, 2]

        later = DateRange.from_dates(date(2024, 3, 3), None)
        assert [t.product_name for t in handler.handle(date_range=later)] == ["Gadget", "Widget"]
        assert len(handler.handle(product_id=widget.id, date_range=later)) == 1
