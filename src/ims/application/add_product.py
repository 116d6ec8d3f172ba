"""Application service: Add Product use case."""

from __future__ import annotations

from typing import Any

from ims.application.dto import ProductDTO, product_dto
from ims.domain.model.product import ProductDraft
from ims.domain.service.ledger_engine import LedgerEngine


class AddProductHandler:

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    def handle(
        self,
        name: str | None,
        category: str | None,
        price: Any,
        quantity: Any = 0,
        min_stock_level: Any = 0,
        description: str | None = "",
    ) -> ProductDTO:
        """Add a new product to the catalog.

        Numeric fields may be strings straight from a form or the
        command line; the Product factory parses and validates them.
        """
        draft = ProductDraft(
            name=name,
            category=category,
            price=price,
            quantity=quantity,
            min_stock_level=min_stock_level,
            description=description,
        )
        return product_dto(self._engine.create_product(draft))
