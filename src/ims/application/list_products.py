"""Application service: List Products use case (query)."""

from __future__ import annotations

from ims.application.dto import ProductDTO, product_dto
from ims.domain.service.ledger_engine import LedgerEngine


class ListProductsHandler:

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    def handle(self, search: str | None = None, category: str | None = None) -> list[ProductDTO]:
        catalog = self._engine.snapshot().catalog
        return [product_dto(p) for p in catalog.search(search, category)]

    def categories(self) -> list[str]:
        return self._engine.snapshot().catalog.categories()
