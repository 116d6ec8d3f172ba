"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ims.domain.exceptions import ValidationError

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount in the shop's single currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in price and valuation calculations.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor)

    def discounted(self, percent: Decimal) -> Money:
        """Apply a percentage discount and round half-up to cents."""
        factor = (Decimal("100") - percent) / Decimal("100")
        return Money((self.amount * factor).quantize(_CENT, rounding=ROUND_HALF_UP))

    def divided_by(self, count: int) -> Money:
        if count <= 0:
            return Money.zero()
        return Money((self.amount / count).quantize(_CENT, rounding=ROUND_HALF_UP))

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        if amount is None or isinstance(amount, bool):
            raise ValidationError(f"Invalid money amount: {amount!r}")
        try:
            return Money(Decimal(str(amount).strip()))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that a stock movement or sale line always
    moves at least one unit.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)

    @staticmethod
    def of(raw: object) -> Quantity:
        """Parse user input (int or integer string) into a Quantity."""
        return Quantity(parse_int(raw, "Quantity"))


def parse_int(raw: object, field_name: str) -> int:
    """Parse an integer supplied as an int, an integral float or a string."""
    if raw is None or isinstance(raw, bool):
        raise ValidationError(f"{field_name} is required")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if raw.is_integer():
            return int(raw)
        raise ValidationError(f"{field_name} must be a whole number, got {raw!r}")
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise ValidationError(
            f"{field_name} must be a whole number, got {raw!r}"
        ) from exc


def parse_non_negative_int(raw: object, field_name: str) -> int:
    value = parse_int(raw, field_name)
    if value < 0:
        raise ValidationError(f"{field_name} cannot be negative, got {value}")
    return value


def parse_percent(raw: object) -> Decimal:
    """Parse a discount percentage in the closed range [0, 100]."""
    if raw is None or raw == "":
        return Decimal("0")
    if isinstance(raw, bool):
        raise ValidationError(f"Invalid discount: {raw!r}")
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation as exc:
        raise ValidationError(f"Invalid discount: {raw!r}") from exc
    if not value.is_finite() or value < 0 or value > 100:
        raise ValidationError(f"Discount must be between 0 and 100, got {raw}")
    return value


@dataclass(frozen=True)
class DateRange:
    """Closed interval ``[start, end]`` of aware UTC timestamps."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValidationError(
                f"Date range start {self.start.isoformat()} is after end "
                f"{self.end.isoformat()}"
            )

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    @staticmethod
    def from_dates(start: date | None, end: date | None) -> DateRange | None:
        """Build a range covering whole calendar days, or None for all time.

        A missing bound is open on that side.
        """
        if start is None and end is None:
            return None
        lower = (
            datetime.combine(start, time.min, tzinfo=timezone.utc)
            if start is not None
            else datetime.min.replace(tzinfo=timezone.utc)
        )
        upper = (
            datetime.combine(end, time.max, tzinfo=timezone.utc)
            if end is not None
            else datetime.max.replace(tzinfo=timezone.utc)
        )
        return DateRange(lower, upper)
