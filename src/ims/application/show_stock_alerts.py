"""Application service: Show Stock Alerts use case (query)."""

from __future__ import annotations

from ims.application.dto import ProductDTO, product_dto
from ims.domain.service import projections
from ims.domain.service.ledger_engine import LedgerEngine


class ShowStockAlertsHandler:

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    def low_stock(self) -> list[ProductDTO]:
        """Products at or below their minimum stock level."""
        return [product_dto(p) for p in projections.low_stock(self._engine.snapshot())]

    def out_of_stock(self) -> list[ProductDTO]:
        return [product_dto(p) for p in projections.out_of_stock(self._engine.snapshot())]
