"""Application service: List Stock Transactions use case (query)."""

from __future__ import annotations

from ims.application.dto import StockTransactionDTO, transaction_dto
from ims.domain.model.value_objects import DateRange
from ims.domain.service.ledger_engine import LedgerEngine


class ListTransactionsHandler:

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    def handle(
        self,
        product_id: str | None = None,
        date_range: DateRange | None = None,
    ) -> list[StockTransactionDTO]:
        """Journal entries in chronological order, optionally filtered."""
        state = self._engine.snapshot()
        entries = state.journal.list_between(date_range)
        if product_id:
            entries = [e for e in entries if e.product_id == product_id]
        return [transaction_dto(e, state) for e in entries]
