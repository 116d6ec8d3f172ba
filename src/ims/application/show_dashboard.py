"""Application service: Show Dashboard use case (query)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ims.domain.service import projections
from ims.domain.service.ledger_engine import LedgerEngine


@dataclass(frozen=True)
class DashboardDTO:
    product_count: int
    inventory_value: Decimal
    low_stock_count: int
    out_of_stock_count: int
    sales_count: int
    sales_total: Decimal


class ShowDashboardHandler:

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    def handle(self) -> DashboardDTO:
        state = self._engine.snapshot()
        summary = projections.dashboard(state)
        sales = projections.sales_summary(state)
        return DashboardDTO(
            product_count=summary.product_count,
            inventory_value=summary.inventory_value.amount,
            low_stock_count=summary.low_stock_count,
            out_of_stock_count=summary.out_of_stock_count,
            sales_count=sales.count,
            sales_total=sales.total.amount,
        )
