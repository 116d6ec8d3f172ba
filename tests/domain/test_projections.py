"""Tests for read-only projections over the ledger."""

from datetime import date
from decimal import Decimal

from ims.domain.model.product import ProductChanges, ProductDraft
from ims.domain.model.value_objects import DateRange, Money
from ims.domain.service import projections
from ims.domain.service.ledger_engine import SaleLineRequest
from tests.fakes import FakeClock, make_engine


def _seed():
    clock = FakeClock()
    engine = make_engine(clock=clock)
    pen = engine.create_product(ProductDraft("Pen", "Stationery", "1.50", 20, 5))
    pad = engine.create_product(ProductDraft("Pad", "Stationery", "4.00", 5, 5))
    ink = engine.create_product(ProductDraft("Ink", "Stationery", "7.25", 0, 2))
    return engine, clock, pen, pad, ink


class TestEmptyLedger:

    def test_empty_catalog_values(self):
        state = make_engine().snapshot()
        assert state.catalog.list() == []
        assert projections.inventory_value(state) == Money.zero()
        assert projections.top_selling(state) == []
        assert projections.sales_total(state) == Money.zero()
        summary = projections.sales_summary(state)
        assert summary.count == 0
        assert summary.average == Money.zero()


class TestStockProjections:

    def test_low_stock_is_at_or_below_minimum(self):
        engine, _, _, pad, ink = _seed()
        assert [p.id for p in projections.low_stock(engine.snapshot())] == [pad.id, ink.id]

    def test_low_stock_reflects_latest_state(self):
        engine, _, pen, pad, ink = _seed()
        engine.post_stock_transaction(pen.id, "subtract", 16)
        assert [p.id for p in projections.low_stock(engine.snapshot())] == [pen.id, pad.id, ink.id]

    def test_out_of_stock(self):
        engine, _, _, _, ink = _seed()
        assert [p.id for p in projections.out_of_stock(engine.snapshot())] == [ink.id]

    def test_inventory_value(self):
        engine, *_ = _seed()
        # 20 * 1.50 + 5 * 4.00 + 0 * 7.25
        assert projections.inventory_value(engine.snapshot()).amount == Decimal("50.00")

    def test_dashboard(self):
        engine, *_ = _seed()
        summary = projections.dashboard(engine.snapshot())
        assert summary.product_count == 3
        assert summary.low_stock_count == 2
        assert summary.out_of_stock_count == 1


class TestTopSelling:

    def test_ranks_by_units_sold(self):
        engine, _, pen, pad, _ = _seed()
        engine.record_sale([SaleLineRequest(pad.id, 2)])
        engine.record_sale([SaleLineRequest(pen.id, 3), SaleLineRequest(pen.id, 4)])
        engine.post_stock_transaction(pen.id, "add", 50)

        rows = projections.top_selling(engine.snapshot())
        assert [(r.product_id, r.quantity) for r in rows] == [(pen.id, 7), (pad.id, 2)]
        assert rows[0].revenue.amount == Decimal("10.50")

    def test_stock_corrections_are_not_sales(self):
        engine, _, pen, pad, _ = _seed()
        engine.post_stock_transaction(pen.id, "subtract", 6, "Damaged")
        engine.update_product(pad.id, ProductChanges(quantity=2))
        assert projections.top_selling(engine.snapshot()) == []

    def test_ties_keep_first_seen_order(self):
        engine, _, pen, pad, _ = _seed()
        engine.record_sale([SaleLineRequest(pad.id, 2)])
        engine.record_sale([SaleLineRequest(pen.id, 2)])
        rows = projections.top_selling(engine.snapshot())
        assert [r.product_id for r in rows] == [pad.id, pen.id]

    def test_limit(self):
        engine, _, pen, pad, _ = _seed()
        engine.record_sale([SaleLineRequest(pad.id, 1), SaleLineRequest(pen.id, 2)])
        assert len(projections.top_selling(engine.snapshot(), 1)) == 1
        assert projections.top_selling(engine.snapshot(), 0) == []

    def test_deleted_product_is_unknown_but_keeps_revenue(self):
        engine, _, pen, _, _ = _seed()
        engine.record_sale([SaleLineRequest(pen.id, 2)])
        engine.delete_product(pen.id)
        row = projections.top_selling(engine.snapshot())[0]
        assert row.product_name == projections.UNKNOWN_PRODUCT
        assert row.revenue.amount == Decimal("3.00")
        assert row.product is None

    def test_revenue_uses_price_at_time_of_sale(self):
        engine, _, pen, _, _ = _seed()
        engine.record_sale([SaleLineRequest(pen.id, 2)])
        engine.update_product(pen.id, ProductChanges(price="10.00"))
        engine.record_sale([SaleLineRequest(pen.id, 1, "1.00")])

        state = engine.snapshot()
        assert projections.top_selling(state)[0].revenue.amount == Decimal("4.00")
        assert projections.sales_total(state).amount == Decimal("4.00")

    def test_date_range_filters_sales(self):
        engine, clock, pen, pad, _ = _seed()
        engine.record_sale([SaleLineRequest(pen.id, 5)])
        clock.advance(days=10)
        engine.record_sale([SaleLineRequest(pad.id, 1)])

        window = DateRange.from_dates(date(2024, 3, 5), date(2024, 3, 31))
        rows = projections.top_selling(engine.snapshot(), date_range=window)
        assert [r.product_id for r in rows] == [pad.id]


class TestSales:

    def test_sales_total_in_range(self):
        engine, clock, pen, pad, _ = _seed()
        engine.record_sale([SaleLineRequest(pen.id, 2)])
        clock.advance(days=1)
        engine.record_sale([SaleLineRequest(pad.id, 1)], discount_percent=50)

        state = engine.snapshot()
        assert projections.sales_total(state).amount == Decimal("5.00")
        day_two = DateRange.from_dates(date(2024, 3, 2), date(2024, 3, 2))
        assert projections.sales_total(state, day_two).amount == Decimal("2.00")
        assert len(projections.sales_between(state, day_two)) == 1

    def test_summary_average(self):
        engine, _, pen, pad, _ = _seed()
        engine.record_sale([SaleLineRequest(pen.id, 1)])
        engine.record_sale([SaleLineRequest(pad.id, 1)])
        summary = projections.sales_summary(engine.snapshot())
        assert summary.count == 2
        assert summary.total.amount == Decimal("5.50")
        assert summary.average.amount == Decimal("2.75")

    def test_stock_received_counts_adds(self):
        engine, _, pen, _, _ = _seed()
        engine.post_stock_transaction(pen.id, "add", 4)
        engine.post_stock_transaction(pen.id, "subtract", 1)
        engine.post_stock_transaction(pen.id, "add", 6)
        assert projections.stock_received(engine.snapshot()) == 10
