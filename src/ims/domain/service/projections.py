"""Read-only projections over a committed LedgerState.

Every function recomputes its answer from the state it is given; nothing
is cached between calls.
"""

from __future__ import annotations

from dataclasses import dataclass

from ims.domain.model.ledger_state import LedgerState
from ims.domain.model.product import Product
from ims.domain.model.sale import Sale
from ims.domain.model.stock_transaction import MovementType
from ims.domain.model.value_objects import DateRange, Money

UNKNOWN_PRODUCT = "Unknown product"
DEFAULT_TOP_SELLERS = 5


@dataclass(frozen=True)
class ProductSales:
    product_id: str
    product_name: str
    quantity: int
    revenue: Money
    product: Product | None  # None once the product has been deleted


@dataclass(frozen=True)
class SalesSummary:
    count: int
    total: Money
    average: Money


@dataclass(frozen=True)
class DashboardSummary:
    product_count: int
    inventory_value: Money
    low_stock_count: int
    out_of_stock_count: int


def low_stock(state: LedgerState) -> list[Product]:
    """Products at or below their own minimum, in catalog order."""
    return [p for p in state.catalog if p.is_low_stock]


def out_of_stock(state: LedgerState) -> list[Product]:
    return [p for p in state.catalog if p.is_out_of_stock]


def inventory_value(state: LedgerState) -> Money:
    total = Money.zero()
    for product in state.catalog:
        total = total + product.stock_value
    return total


def top_selling(
    state: LedgerState,
    n: int = DEFAULT_TOP_SELLERS,
    date_range: DateRange | None = None,
) -> list[ProductSales]:
    """Products ranked by units sold in ``date_range``.

    Only Sale lines count; manual withdrawals and adjustments do not.
    Revenue sums each line's locked ``unit_price`` times its quantity.
    Ties keep the order in which each product was first sold. A deleted
    product is reported as ``UNKNOWN_PRODUCT``.
    """
    if n <= 0:
        return []
    units: dict[str, int] = {}
    revenue: dict[str, Money] = {}
    for sale in sales_between(state, date_range):
        for line in sale.lines:
            units[line.product_id] = units.get(line.product_id, 0) + line.quantity.value
            revenue[line.product_id] = revenue.get(line.product_id, Money.zero()) + line.subtotal

    rows = []
    for product_id, quantity in units.items():
        product = state.catalog.get(product_id)
        rows.append(
            ProductSales(
                product_id=product_id,
                product_name=product.name if product else UNKNOWN_PRODUCT,
                quantity=quantity,
                revenue=revenue[product_id],
                product=product,
            )
        )
    # sorted() is stable, so equal quantities keep first-seen order
    rows = sorted(rows, key=lambda row: row.quantity, reverse=True)
    return rows[:n]


def sales_between(state: LedgerState, date_range: DateRange | None = None) -> list[Sale]:
    if date_range is None:
        return list(state.sales)
    return [s for s in state.sales if date_range.contains(s.created_at)]


def sales_total(state: LedgerState, date_range: DateRange | None = None) -> Money:
    """Sum of Sale totals whose timestamp lies in ``[start, end]``."""
    total = Money.zero()
    for sale in sales_between(state, date_range):
        total = total + sale.total
    return total


def sales_summary(state: LedgerState, date_range: DateRange | None = None) -> SalesSummary:
    sales = sales_between(state, date_range)
    total = Money.zero()
    for sale in sales:
        total = total + sale.total
    return SalesSummary(count=len(sales), total=total, average=total.divided_by(len(sales)))


def stock_received(state: LedgerState, date_range: DateRange | None = None) -> int:
    """Units brought in by ``add`` movements in ``date_range``."""
    return sum(
        e.quantity.value
        for e in state.journal.list_between(date_range)
        if e.type is MovementType.ADD
    )


def dashboard(state: LedgerState) -> DashboardSummary:
    return DashboardSummary(
        product_count=len(state.catalog),
        inventory_value=inventory_value(state),
        low_stock_count=len(low_stock(state)),
        out_of_stock_count=len(out_of_stock(state)),
    )
