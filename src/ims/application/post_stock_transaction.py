"""Application service: Post Stock Transaction use case.

Receipts (``add``) and withdrawals (``subtract``) are the only way the
on-hand quantity of a product changes.
"""

from __future__ import annotations

from typing import Any

from ims.application.dto import PostingDTO, StockTransactionDTO, product_dto
from ims.domain.service.ledger_engine import LedgerEngine


class PostStockTransactionHandler:

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    def handle(
        self,
        product_id: str,
        movement_type: str,
        quantity: Any,
        notes: str | None = None,
    ) -> PostingDTO:
        posting = self._engine.post_stock_transaction(
            product_id, movement_type, quantity, notes
        )
        entry = posting.transaction
        return PostingDTO(
            transaction=StockTransactionDTO(
                id=entry.id,
                product_id=entry.product_id,
                product_name=posting.product.name,
                type=entry.type.value,
                quantity=entry.quantity.value,
                notes=entry.notes,
                created_at=entry.created_at,
            ),
            product=product_dto(posting.product),
            warning=posting.warning,
        )
