"""Application service: Update Product use case."""

from __future__ import annotations

from ims.application.dto import ProductDTO, product_dto
from ims.domain.model.product import ProductChanges
from ims.domain.service.ledger_engine import LedgerEngine


class UpdateProductHandler:

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    def handle(self, product_id: str, changes: ProductChanges) -> ProductDTO:
        """Apply a partial update; unsupplied fields keep their value.

        A new quantity is recorded in the journal as an adjustment rather
        than overwritten silently.
        """
        return product_dto(self._engine.update_product(product_id, changes))
