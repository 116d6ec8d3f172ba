"""Application service: Show Sales Report use case (query).

Everything here is computed from one snapshot so the figures in a
single report are mutually consistent.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ims.domain.model.value_objects import DateRange
from ims.domain.service import projections
from ims.domain.service.ledger_engine import LedgerEngine


@dataclass(frozen=True)
class TopSellerDTO:
    product_id: str
    product_name: str
    quantity: int
    revenue: Decimal


@dataclass(frozen=True)
class SalesReportDTO:
    top_sellers: list[TopSellerDTO]
    sales_count: int
    sales_total: Decimal
    average_sale: Decimal
    units_received: int
    transaction_count: int
    low_stock_count: int


class ShowSalesReportHandler:

    def __init__(self, engine: LedgerEngine, top_n: int = projections.DEFAULT_TOP_SELLERS) -> None:
        self._engine = engine
        self._top_n = top_n

    def top_selling(
        self, n: int | None = None, date_range: DateRange | None = None
    ) -> list[TopSellerDTO]:
        rows = projections.top_selling(
            self._engine.snapshot(), self._top_n if n is None else n, date_range
        )
        return [self._to_dto(row) for row in rows]

    def sales_total(self, date_range: DateRange | None = None) -> Decimal:
        return projections.sales_total(self._engine.snapshot(), date_range).amount

    def inventory_value(self) -> Decimal:
        return projections.inventory_value(self._engine.snapshot()).amount

    def handle(self, date_range: DateRange | None = None) -> SalesReportDTO:
        state = self._engine.snapshot()
        summary = projections.sales_summary(state, date_range)
        return SalesReportDTO(
            top_sellers=[
                self._to_dto(row)
                for row in projections.top_selling(state, self._top_n, date_range)
            ],
            sales_count=summary.count,
            sales_total=summary.total.amount,
            average_sale=summary.average.amount,
            units_received=projections.stock_received(state, date_range),
            transaction_count=len(state.journal.list_between(date_range)),
            low_stock_count=len(projections.low_stock(state)),
        )

    @staticmethod
    def _to_dto(row: projections.ProductSales) -> TopSellerDTO:
        return TopSellerDTO(
            product_id=row.product_id,
            product_name=row.product_name,
            quantity=row.quantity,
            revenue=row.revenue.amount,
        )
