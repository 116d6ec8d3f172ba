"""Application service: Show Product use case (query)."""

from __future__ import annotations

from ims.application.dto import ProductDTO, StockTransactionDTO, product_dto, transaction_dto
from ims.domain.service.ledger_engine import LedgerEngine


class ShowProductHandler:

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    def handle(self, product_id: str) -> ProductDTO:
        return product_dto(self._engine.snapshot().catalog.require(product_id))

    def history(self, product_id: str) -> list[StockTransactionDTO]:
        """Journal entries for one product, oldest first.

        Works for deleted products too; their history is kept.
        """
        state = self._engine.snapshot()
        return [transaction_dto(e, state) for e in state.journal.list_by_product(product_id)]
