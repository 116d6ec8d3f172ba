"""Application service: Delete Product use case."""

from __future__ import annotations

from ims.application.dto import ProductDTO, product_dto
from ims.domain.service.ledger_engine import LedgerEngine


class DeleteProductHandler:

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    def handle(self, product_id: str) -> ProductDTO:
        """Remove a product. Its journal history is retained."""
        return product_dto(self._engine.delete_product(product_id))
