"""Pydantic request/response schemas for the HTTP API.

These are external contracts (camelCase on the wire), kept separate
from the application DTOs. Numeric request fields accept numbers or
numeric strings; the domain parses and validates them.
"""

from dataclasses import asdict
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_dto(cls, dto: Any):
        return cls(**asdict(dto))


Number = int | float | str | None


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateProductRequest(CamelModel):
    name: str | None = None
    description: str | None = ""
    category: str | None = None
    price: Number = None
    quantity: Number = 0
    min_stock_level: Number = 0

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "name": "Espresso Beans 1kg",
                    "description": "Dark roast",
                    "category": "Coffee",
                    "price": "18.50",
                    "quantity": 12,
                    "minStockLevel": 5,
                }
            ]
        },
    )


class UpdateProductRequest(CamelModel):
    """Every field is optional; only fields present in the body change."""

    name: str | None = None
    description: str | None = None
    category: str | None = None
    price: Number = None
    quantity: Number = None
    min_stock_level: Number = None


class PostTransactionRequest(CamelModel):
    product_id: str | None = None
    type: str | None = None
    quantity: Number = None
    notes: str | None = None


class SaleItemRequest(CamelModel):
    product_id: str
    quantity: Number = 1
    unit_price: Number = None


class RecordSaleRequest(CamelModel):
    items: list[SaleItemRequest]
    discount_percent: Number = 0
    payment_method: str | None = None
    customer: str | None = None


class CreateCustomerRequest(CamelModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    loyalty_points: Number = 0


class UpdateCustomerRequest(CamelModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    loyalty_points: Number = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ProductResponse(CamelModel):
    id: str
    name: str
    description: str
    category: str
    price: float
    quantity: int
    min_stock_level: int
    low_stock: bool
    created_at: datetime
    updated_at: datetime


class TransactionResponse(CamelModel):
    id: str
    product_id: str
    product_name: str
    type: str
    quantity: int
    notes: str | None = None
    created_at: datetime


class PostingResponse(CamelModel):
    transaction: TransactionResponse
    warning: str | None = None


class SaleLineResponse(CamelModel):
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    subtotal: float


class SaleResponse(CamelModel):
    id: str
    customer: str
    lines: list[SaleLineResponse]
    subtotal: float
    discount_percent: float
    total: float
    payment_method: str
    created_at: datetime


class SaleReceiptResponse(CamelModel):
    sale: SaleResponse
    warnings: list[str]


class CustomerResponse(CamelModel):
    id: str
    name: str
    email: str
    phone: str
    loyalty_points: int
    last_visit: date


class MessageResponse(BaseModel):
    message: str
    id: str


class TopSellerResponse(CamelModel):
    product_id: str
    product_name: str
    quantity: int
    revenue: float


class AmountResponse(BaseModel):
    amount: float


class SalesSummaryResponse(CamelModel):
    top_sellers: list[TopSellerResponse]
    sales_count: int
    sales_total: float
    average_sale: float
    units_received: int
    transaction_count: int
    low_stock_count: int


class DashboardResponse(CamelModel):
    product_count: int
    inventory_value: float
    low_stock_count: int
    out_of_stock_count: int
    sales_count: int
    sales_total: float
