"""Product aggregate.

A product carries its catalog attributes plus the current on-hand
quantity. Catalog attributes change through update commands; the
quantity changes only when the ledger engine applies a stock movement.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any

from ims.domain.exceptions import InsufficientStockError, ValidationError
from ims.domain.model.value_objects import Money, parse_non_negative_int


class _Unset:
    """Marker for a field that was not supplied in a partial update."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Unset:
        return self

    def __deepcopy__(self, memo: dict) -> _Unset:
        return self


UNSET: Any = _Unset()


@dataclass(frozen=True)
class ProductDraft:
    """Raw input for a new product, as typed by a user or sent by a client.

    Numeric fields may arrive as strings; ``Product.create`` parses them.
    """

    name: str | None
    category: str | None
    price: Any
    quantity: Any = 0
    min_stock_level: Any = 0
    description: str | None = ""


@dataclass(frozen=True)
class ProductChanges:
    """Partial update. Fields left as ``UNSET`` keep their current value.

    ``description=""`` is a real value and clears the description.
    ``quantity`` is not written directly; the ledger engine turns it
    into a journaled adjustment.
    """

    name: Any = UNSET
    description: Any = UNSET
    category: Any = UNSET
    price: Any = UNSET
    quantity: Any = UNSET
    min_stock_level: Any = UNSET

    def supplied(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    @property
    def is_empty(self) -> bool:
        return not self.supplied()


@dataclass
class Product:
    """A sellable item in the catalog.

    Invariants:
    - ``name`` and ``category`` are never blank
    - ``price`` is never negative (enforced by ``Money``)
    - ``quantity`` and ``min_stock_level`` are never negative
    """

    id: str
    name: str
    category: str
    price: Money
    quantity: int
    min_stock_level: int
    created_at: datetime
    updated_at: datetime
    description: str = ""

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(product_id: str, draft: ProductDraft, now: datetime) -> Product:
        """Build a new product from raw input, enforcing all invariants."""
        return Product(
            id=product_id,
            name=_required_text(draft.name, "Product name"),
            category=_required_text(draft.category, "Category"),
            description=_optional_text(draft.description),
            price=_parse_price(draft.price),
            quantity=parse_non_negative_int(draft.quantity, "Quantity"),
            min_stock_level=parse_non_negative_int(
                draft.min_stock_level, "Minimum stock level"
            ),
            created_at=now,
            updated_at=now,
        )

    # --- Mutations ------------------------------------------------------------

    def apply_changes(self, changes: ProductChanges, now: datetime) -> None:
        """Merge supplied catalog fields over the current record.

        Every supplied value is validated before any field is touched, so
        a bad value leaves the product unchanged. ``quantity`` is ignored
        here; see ``LedgerEngine.update_product``.
        """
        name = self.name
        category = self.category
        description = self.description
        price = self.price
        min_stock_level = self.min_stock_level

        if changes.name is not UNSET:
            name = _required_text(changes.name, "Product name")
        if changes.category is not UNSET:
            category = _required_text(changes.category, "Category")
        if changes.description is not UNSET:
            description = _optional_text(changes.description)
        if changes.price is not UNSET:
            price = _parse_price(changes.price)
        if changes.min_stock_level is not UNSET:
            min_stock_level = parse_non_negative_int(
                changes.min_stock_level, "Minimum stock level"
            )

        self.name = name
        self.category = category
        self.description = description
        self.price = price
        self.min_stock_level = min_stock_level
        self.updated_at = now

    def receive(self, quantity: int, now: datetime) -> None:
        """Add units to on-hand stock."""
        if quantity <= 0:
            raise ValidationError("Receipt quantity must be positive")
        self.quantity += quantity
        self.updated_at = now

    def withdraw(self, quantity: int, now: datetime) -> None:
        """Remove units from on-hand stock.

        Raises InsufficientStockError if fewer than ``quantity`` units
        are on hand; the quantity is left untouched in that case.
        """
        if quantity <= 0:
            raise ValidationError("Withdrawal quantity must be positive")
        if quantity > self.quantity:
            raise InsufficientStockError(
                f"Insufficient stock for {self.name} "
                f"(need {quantity}, have {self.quantity})"
            )
        self.quantity -= quantity
        self.updated_at = now

    # --- Computed properties --------------------------------------------------

    @property
    def stock_value(self) -> Money:
        return self.price * self.quantity

    @property
    def is_low_stock(self) -> bool:
        """At or below the configured minimum."""
        return self.quantity <= self.min_stock_level

    @property
    def is_below_minimum(self) -> bool:
        return self.quantity < self.min_stock_level

    @property
    def is_out_of_stock(self) -> bool:
        return self.quantity == 0

    def low_stock_message(self) -> str:
        return (
            f"Low stock alert: {self.name} has only {self.quantity} units left "
            f"(minimum {self.min_stock_level})"
        )


def _required_text(raw: object, label: str) -> str:
    if raw is None or not isinstance(raw, str) or not raw.strip():
        raise ValidationError(f"{label} is required")
    return raw.strip()


def _optional_text(raw: object) -> str:
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise ValidationError(f"Expected text, got {type(raw).__name__}")
    return raw.strip()


def _parse_price(raw: object) -> Money:
    if raw is None or raw == "":
        raise ValidationError("Price is required")
    return Money.of(raw)  # type: ignore[arg-type]
