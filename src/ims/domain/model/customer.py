"""Customer record kept alongside the catalog for the sales screens."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from ims.domain.exceptions import ValidationError
from ims.domain.model.product import UNSET
from ims.domain.model.value_objects import parse_non_negative_int


@dataclass(frozen=True)
class CustomerChanges:
    name: Any = UNSET
    email: Any = UNSET
    phone: Any = UNSET
    loyalty_points: Any = UNSET


@dataclass
class Customer:
    id: str
    name: str
    email: str
    phone: str
    loyalty_points: int
    last_visit: date

    @staticmethod
    def create(
        customer_id: str,
        name: str | None,
        email: str | None,
        phone: str | None,
        loyalty_points: object,
        today: date,
    ) -> Customer:
        return Customer(
            id=customer_id,
            name=_name(name),
            email=_email(email),
            phone=(phone or "").strip(),
            loyalty_points=parse_non_negative_int(
                0 if loyalty_points in (None, "") else loyalty_points,
                "Loyalty points",
            ),
            last_visit=today,
        )

    def apply_changes(self, changes: CustomerChanges) -> None:
        name = self.name if changes.name is UNSET else _name(changes.name)
        email = self.email if changes.email is UNSET else _email(changes.email)
        phone = self.phone if changes.phone is UNSET else (changes.phone or "").strip()
        points = (
            self.loyalty_points
            if changes.loyalty_points is UNSET
            else parse_non_negative_int(changes.loyalty_points, "Loyalty points")
        )
        self.name, self.email, self.phone, self.loyalty_points = name, email, phone, points


def _name(raw: object) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError("Customer name is required")
    return raw.strip()


def _email(raw: object) -> str:
    if raw is None:
        return ""
    if not isinstance(raw, str):
        raise ValidationError(f"Invalid email: {raw!r}")
    value = raw.strip()
    if value and "@" not in value:
        raise ValidationError(f"Invalid email: {raw!r}")
    return value
