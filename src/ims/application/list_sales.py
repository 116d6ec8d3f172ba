"""Application service: List Sales use case (query)."""

from __future__ import annotations

from ims.application.dto import SaleDTO, sale_dto
from ims.domain.model.value_objects import DateRange
from ims.domain.service import projections
from ims.domain.service.ledger_engine import LedgerEngine


class ListSalesHandler:

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    def handle(self, date_range: DateRange | None = None) -> list[SaleDTO]:
        state = self._engine.snapshot()
        return [sale_dto(s) for s in projections.sales_between(state, date_range)]
