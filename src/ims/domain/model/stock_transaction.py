"""StockTransaction: one immutable stock movement in the journal."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ims.domain.exceptions import ValidationError
from ims.domain.model.value_objects import Quantity


class MovementType(Enum):
    ADD = "add"
    SUBTRACT = "subtract"

    @staticmethod
    def parse(raw: object) -> MovementType:
        if isinstance(raw, MovementType):
            return raw
        if not raw:
            raise ValidationError("Transaction type is required")
        try:
            return MovementType(str(raw).strip().lower())
        except ValueError as exc:
            raise ValidationError(
                f"Invalid transaction type {raw!r} (expected 'add' or 'subtract')"
            ) from exc


@dataclass(frozen=True)
class StockTransaction:
    """The durable record of why a product's quantity changed.

    Frozen: a transaction never changes once it is in the journal.
    """

    id: str
    product_id: str
    type: MovementType
    quantity: Quantity
    created_at: datetime
    notes: str | None = None

    @property
    def signed_quantity(self) -> int:
        if self.type is MovementType.ADD:
            return self.quantity.value
        return -self.quantity.value
