"""Sale: a completed multi-item checkout.

A Sale is recorded only after every line's stock withdrawal has been
applied; it keeps a price snapshot of each line so later catalog price
changes never alter historical totals.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from ims.domain.exceptions import ValidationError
from ims.domain.model.value_objects import Money, Quantity

WALK_IN_CUSTOMER = "Walk-in Customer"
MAX_LINES = 100


class PaymentMethod(Enum):
    CASH = "cash"
    CARD = "card"
    MOBILE = "mobile"

    @staticmethod
    def parse(raw: object) -> PaymentMethod:
        if isinstance(raw, PaymentMethod):
            return raw
        if raw is None or raw == "":
            return PaymentMethod.CASH
        try:
            return PaymentMethod(str(raw).strip().lower())
        except ValueError as exc:
            choices = ", ".join(m.value for m in PaymentMethod)
            raise ValidationError(
                f"Invalid payment method {raw!r} (expected one of: {choices})"
            ) from exc


@dataclass(frozen=True)
class SaleLine:
    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at checkout time

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class Sale:
    """Aggregate for a completed checkout.

    Use ``Sale.create()`` for new sales; the plain constructor is kept
    simple so the store can reconstitute persisted records.
    """

    id: str
    customer_label: str
    lines: tuple[SaleLine, ...]
    discount_percent: Decimal
    payment_method: PaymentMethod
    created_at: datetime

    @staticmethod
    def create(
        sale_id: str,
        lines: list[SaleLine],
        discount_percent: Decimal,
        payment_method: PaymentMethod,
        customer_label: str | None,
        now: datetime,
    ) -> Sale:
        if not lines:
            raise ValidationError("Sale must contain at least one item")
        if len(lines) > MAX_LINES:
            raise ValidationError(f"Maximum {MAX_LINES} lines per sale")
        if discount_percent < 0 or discount_percent > 100:
            raise ValidationError(
                f"Discount must be between 0 and 100, got {discount_percent}"
            )
        label = (customer_label or "").strip() or WALK_IN_CUSTOMER
        return Sale(
            id=sale_id,
            customer_label=label,
            lines=tuple(lines),
            discount_percent=discount_percent,
            payment_method=payment_method,
            created_at=now,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def subtotal(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.subtotal
        return result

    @property
    def total(self) -> Money:
        """Sum of line subtotals minus the percentage discount."""
        return self.subtotal.discounted(self.discount_percent)

    @property
    def item_count(self) -> int:
        return sum(line.quantity.value for line in self.lines)
