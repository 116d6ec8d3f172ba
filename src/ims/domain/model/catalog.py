"""Catalog: the ordered mapping of product id to Product.

Insertion order is preserved so listings and projections are stable.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import datetime

from ims.domain.exceptions import NotFoundError, ValidationError
from ims.domain.model.product import Product, ProductChanges, ProductDraft


class Catalog:

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._products: dict[str, Product] = {}
        for product in products:
            self.add(product)

    # --- Commands -------------------------------------------------------------

    def add(self, product: Product) -> None:
        if product.id in self._products:
            raise ValidationError(f"Product ID '{product.id}' already exists")
        self._products[product.id] = product

    def create(self, product_id: str, draft: ProductDraft, now: datetime) -> Product:
        """Validate a draft and insert the resulting product."""
        product = Product.create(product_id, draft, now)
        self.add(product)
        return product

    def update(self, product_id: str, changes: ProductChanges, now: datetime) -> Product:
        product = self.require(product_id)
        product.apply_changes(changes, now)
        return product

    def delete(self, product_id: str) -> Product:
        """Remove a product. Journal entries that reference it are kept."""
        product = self.require(product_id)
        del self._products[product_id]
        return product

    # --- Queries --------------------------------------------------------------

    def get(self, product_id: str) -> Product | None:
        return self._products.get(product_id)

    def require(self, product_id: str) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise NotFoundError(f"Product with ID '{product_id}' not found")
        return product

    def list(self) -> list[Product]:
        return list(self._products.values())

    def search(self, term: str | None = None, category: str | None = None) -> list[Product]:
        """Case-insensitive substring match on name/description, exact category."""
        needle = (term or "").strip().lower()
        result = []
        for product in self._products.values():
            if category and product.category != category:
                continue
            if needle and needle not in product.name.lower() \
                    and needle not in product.description.lower():
                continue
            result.append(product)
        return result

    def categories(self) -> list[str]:
        return list(dict.fromkeys(p.category for p in self._products.values()))

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._products

    def __iter__(self) -> Iterator[Product]:
        return iter(list(self._products.values()))

    def __len__(self) -> int:
        return len(self._products)
