"""Integration tests for recording and listing sales."""

from decimal import Decimal

import pytest

from ims.application.add_product import AddProductHandler
from ims.application.list_sales import ListSalesHandler
from ims.application.list_transactions import ListTransactionsHandler
from ims.application.record_sale import RecordSaleHandler
from ims.application.show_product import ShowProductHandler
from ims.application.update_product import UpdateProductHandler
from ims.domain.exceptions import InsufficientStockError
from ims.domain.model.product import ProductChanges
from ims.domain.service.ledger_engine import SaleLineRequest
from tests.fakes import make_engine


def _setup():
    engine = make_engine()
    add = AddProductHandler(engine)
    a = add.handle("Coffee", "Drinks", "3.00", 10, 2)
    b = add.handle("Muffin", "Food", "5.00", 2, 2)
    return engine, a, b


class TestRecordSale:

    def test_receipt(self):
        engine, a, b = _setup()
        receipt = RecordSaleHandler(engine).handle(
            [SaleLineRequest(a.id, 2), SaleLineRequest(b.id, 1)],
            discount_percent="10",
            payment_method="mobile",
            customer="Ada",
        )
        sale = receipt.sale
        assert sale.total == Decimal("9.90")
        assert sale.subtotal == Decimal("11.00")
        assert sale.customer == "Ada"
        assert sale.payment_method == "mobile"
        assert [(line.product_name, line.subtotal) for line in sale.lines] == [
            ("Coffee", Decimal("6.00")),
            ("Muffin", Decimal("5.00")),
        ]
        assert [t.product_name for t in receipt.transactions] == ["Coffee", "Muffin"]
        assert receipt.warnings == ["Low stock alert: Muffin has only 1 units left (minimum 2)"]

    def test_quantities_reduced(self):
        engine, a, b = _setup()
        RecordSaleHandler(engine).handle([SaleLineRequest(a.id, 2), SaleLineRequest(b.id, 1)])
        assert ShowProductHandler(engine).handle(a.id).quantity == 8
        assert ShowProductHandler(engine).handle(b.id).quantity == 1

    def test_failed_line_leaves_everything_unchanged(self):
        engine, a, b = _setup()
        with pytest.raises(InsufficientStockError):
            RecordSaleHandler(engine).handle(
                [SaleLineRequest(a.id, 2), SaleLineRequest(b.id, 3)]
            )
        assert ShowProductHandler(engine).handle(a.id).quantity == 10
        assert ListTransactionsHandler(engine).handle() == []
        assert ListSalesHandler(engine).handle() == []

    def test_sale_price_is_locked(self):
        engine, a, _ = _setup()
        RecordSaleHandler(engine).handle([SaleLineRequest(a.id, 1)])
        UpdateProductHandler(engine).handle(a.id, ProductChanges(price="99.00"))
        assert ListSalesHandler(engine).handle()[0].total == Decimal("3.00")
