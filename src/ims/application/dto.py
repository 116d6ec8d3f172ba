"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data from the application layer to the CLI and HTTP API
without exposing domain internals. Values stay typed (Decimal,
datetime); each surface formats them its own way.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from ims.domain.model.customer import Customer
from ims.domain.model.ledger_state import LedgerState
from ims.domain.model.product import Product
from ims.domain.model.sale import Sale
from ims.domain.model.stock_transaction import StockTransaction
from ims.domain.service.projections import UNKNOWN_PRODUCT


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    description: str
    category: str
    price: Decimal
    quantity: int
    min_stock_level: int
    low_stock: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class StockTransactionDTO:
    id: str
    product_id: str
    product_name: str  # "Unknown product" once the product is deleted
    type: str
    quantity: int
    notes: str | None
    created_at: datetime


@dataclass(frozen=True)
class PostingDTO:
    """Output: an accepted transaction plus the optional low-stock warning."""

    transaction: StockTransactionDTO
    product: ProductDTO
    warning: str | None


@dataclass(frozen=True)
class SaleLineDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


@dataclass(frozen=True)
class SaleDTO:
    id: str
    customer: str
    lines: list[SaleLineDTO]
    subtotal: Decimal
    discount_percent: Decimal
    total: Decimal
    payment_method: str
    created_at: datetime


@dataclass(frozen=True)
class SaleReceiptDTO:
    sale: SaleDTO
    transactions: list[StockTransactionDTO]
    warnings: list[str]


@dataclass(frozen=True)
class CustomerDTO:
    id: str
    name: str
    email: str
    phone: str
    loyalty_points: int
    last_visit: date


# --- Mapping ------------------------------------------------------------------


def product_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        description=product.description,
        category=product.category,
        price=product.price.amount,
        quantity=product.quantity,
        min_stock_level=product.min_stock_level,
        low_stock=product.is_low_stock,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def transaction_dto(entry: StockTransaction, state: LedgerState) -> StockTransactionDTO:
    product = state.catalog.get(entry.product_id)
    return StockTransactionDTO(
        id=entry.id,
        product_id=entry.product_id,
        product_name=product.name if product else UNKNOWN_PRODUCT,
        type=entry.type.value,
        quantity=entry.quantity.value,
        notes=entry.notes,
        created_at=entry.created_at,
    )


def sale_dto(sale: Sale) -> SaleDTO:
    return SaleDTO(
        id=sale.id,
        customer=sale.customer_label,
        lines=[
            SaleLineDTO(
                product_id=line.product_id,
                product_name=line.product_name,
                quantity=line.quantity.value,
                unit_price=line.unit_price.amount,
                subtotal=line.subtotal.amount,
            )
            for line in sale.lines
        ],
        subtotal=sale.subtotal.amount,
        discount_percent=sale.discount_percent,
        total=sale.total.amount,
        payment_method=sale.payment_method.value,
        created_at=sale.created_at,
    )


def customer_dto(customer: Customer) -> CustomerDTO:
    return CustomerDTO(
        id=customer.id,
        name=customer.name,
        email=customer.email,
        phone=customer.phone,
        loyalty_points=customer.loyalty_points,
        last_visit=customer.last_visit,
    )
