"""FastAPI routes for the inventory ledger.

Handlers are plain ``def`` functions: FastAPI runs them in its worker
thread pool, and the ledger engine's lock serializes the mutating ones.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, Request

from ims.application.add_customer import AddCustomerHandler
from ims.application.add_product import AddProductHandler
from ims.application.delete_customer import DeleteCustomerHandler
from ims.application.delete_product import DeleteProductHandler
from ims.application.list_customers import ListCustomersHandler
from ims.application.list_products import ListProductsHandler
from ims.application.list_sales import ListSalesHandler
from ims.application.list_transactions import ListTransactionsHandler
from ims.application.post_stock_transaction import PostStockTransactionHandler
from ims.application.record_sale import RecordSaleHandler
from ims.application.show_dashboard import ShowDashboardHandler
from ims.application.show_product import ShowProductHandler
from ims.application.show_sales_report import ShowSalesReportHandler
from ims.application.show_stock_alerts import ShowStockAlertsHandler
from ims.application.update_customer import UpdateCustomerHandler
from ims.application.update_product import UpdateProductHandler
from ims.domain.model.customer import CustomerChanges
from ims.domain.model.product import ProductChanges
from ims.domain.model.value_objects import DateRange
from ims.domain.service.ledger_engine import LedgerEngine, SaleLineRequest
from ims.infrastructure.api.schemas import (
    AmountResponse,
    CreateCustomerRequest,
    CreateProductRequest,
    CustomerResponse,
    DashboardResponse,
    MessageResponse,
    PostingResponse,
    PostTransactionRequest,
    ProductResponse,
    RecordSaleRequest,
    SaleReceiptResponse,
    SaleResponse,
    SalesSummaryResponse,
    TopSellerResponse,
    TransactionResponse,
    UpdateCustomerRequest,
    UpdateProductRequest,
)


def get_engine(request: Request) -> LedgerEngine:
    return request.app.state.engine


def get_top_sellers(request: Request) -> int:
    return request.app.state.settings.top_sellers


def _date_range(start: date | None, end: date | None) -> DateRange | None:
    return DateRange.from_dates(start, end)


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/api/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductResponse)
def create_product(
    body: CreateProductRequest, engine: LedgerEngine = Depends(get_engine)
) -> ProductResponse:
    dto = AddProductHandler(engine).handle(
        name=body.name,
        category=body.category,
        price=body.price,
        quantity=body.quantity,
        min_stock_level=body.min_stock_level,
        description=body.description,
    )
    return ProductResponse.from_dto(dto)


@product_router.get("", response_model=list[ProductResponse])
def list_products(
    search: str | None = None,
    category: str | None = None,
    engine: LedgerEngine = Depends(get_engine),
) -> list[ProductResponse]:
    dtos = ListProductsHandler(engine).handle(search=search, category=category)
    return [ProductResponse.from_dto(d) for d in dtos]


@product_router.get("/categories", response_model=list[str])
def list_categories(engine: LedgerEngine = Depends(get_engine)) -> list[str]:
    return ListProductsHandler(engine).categories()


@product_router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, engine: LedgerEngine = Depends(get_engine)) -> ProductResponse:
    return ProductResponse.from_dto(ShowProductHandler(engine).handle(product_id))


@product_router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    body: UpdateProductRequest,
    engine: LedgerEngine = Depends(get_engine),
) -> ProductResponse:
    # Only keys present in the body are applied; an explicit null is a value.
    changes = ProductChanges(
        **{field: getattr(body, field) for field in body.model_fields_set}
    )
    dto = UpdateProductHandler(engine).handle(product_id, changes)
    return ProductResponse.from_dto(dto)


@product_router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(product_id: str, engine: LedgerEngine = Depends(get_engine)) -> MessageResponse:
    dto = DeleteProductHandler(engine).handle(product_id)
    return MessageResponse(message="Product deleted successfully", id=dto.id)


@product_router.get("/{product_id}/transactions", response_model=list[TransactionResponse])
def product_history(
    product_id: str, engine: LedgerEngine = Depends(get_engine)
) -> list[TransactionResponse]:
    return [
        TransactionResponse.from_dto(d)
        for d in ShowProductHandler(engine).history(product_id)
    ]


# ---------------------------------------------------------------------------
# Stock Transaction Router
# ---------------------------------------------------------------------------
transaction_router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@transaction_router.post("", response_model=PostingResponse)
def post_transaction(
    body: PostTransactionRequest, engine: LedgerEngine = Depends(get_engine)
) -> PostingResponse:
    dto = PostStockTransactionHandler(engine).handle(
        product_id=body.product_id,
        movement_type=body.type,
        quantity=body.quantity,
        notes=body.notes,
    )
    return PostingResponse.from_dto(dto)


@transaction_router.get("", response_model=list[TransactionResponse])
def list_transactions(
    product_id: str | None = Query(default=None, alias="productId"),
    start: date | None = None,
    end: date | None = None,
    engine: LedgerEngine = Depends(get_engine),
) -> list[TransactionResponse]:
    dtos = ListTransactionsHandler(engine).handle(
        product_id=product_id, date_range=_date_range(start, end)
    )
    return [TransactionResponse.from_dto(d) for d in dtos]


# ---------------------------------------------------------------------------
# Sale Router
# ---------------------------------------------------------------------------
sale_router = APIRouter(prefix="/api/sales", tags=["sales"])


@sale_router.post("", status_code=201, response_model=SaleReceiptResponse)
def record_sale(
    body: RecordSaleRequest, engine: LedgerEngine = Depends(get_engine)
) -> SaleReceiptResponse:
    items = [
        SaleLineRequest(
            product_id=item.product_id,
            quantity=item.quantity,
            unit_price=item.unit_price,
        )
        for item in body.items
    ]
    dto = RecordSaleHandler(engine).handle(
        items,
        discount_percent=body.discount_percent,
        payment_method=body.payment_method,
        customer=body.customer,
    )
    return SaleReceiptResponse.from_dto(dto)


@sale_router.get("", response_model=list[SaleResponse])
def list_sales(
    start: date | None = None,
    end: date | None = None,
    engine: LedgerEngine = Depends(get_engine),
) -> list[SaleResponse]:
    dtos = ListSalesHandler(engine).handle(_date_range(start, end))
    return [SaleResponse.from_dto(d) for d in dtos]


# ---------------------------------------------------------------------------
# Customer Router
# ---------------------------------------------------------------------------
customer_router = APIRouter(prefix="/api/customers", tags=["customers"])


@customer_router.post("", status_code=201, response_model=CustomerResponse)
def create_customer(
    body: CreateCustomerRequest, engine: LedgerEngine = Depends(get_engine)
) -> CustomerResponse:
    dto = AddCustomerHandler(engine).handle(
        name=body.name,
        email=body.email,
        phone=body.phone,
        loyalty_points=body.loyalty_points,
    )
    return CustomerResponse.from_dto(dto)


@customer_router.get("", response_model=list[CustomerResponse])
def list_customers(
    search: str | None = None, engine: LedgerEngine = Depends(get_engine)
) -> list[CustomerResponse]:
    return [CustomerResponse.from_dto(d) for d in ListCustomersHandler(engine).handle(search)]


@customer_router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: str,
    body: UpdateCustomerRequest,
    engine: LedgerEngine = Depends(get_engine),
) -> CustomerResponse:
    changes = CustomerChanges(
        **{field: getattr(body, field) for field in body.model_fields_set}
    )
    return CustomerResponse.from_dto(UpdateCustomerHandler(engine).handle(customer_id, changes))


@customer_router.delete("/{customer_id}", response_model=MessageResponse)
def delete_customer(customer_id: str, engine: LedgerEngine = Depends(get_engine)) -> MessageResponse:
    dto = DeleteCustomerHandler(engine).handle(customer_id)
    return MessageResponse(message="Customer deleted successfully", id=dto.id)


# ---------------------------------------------------------------------------
# Report Router
# ---------------------------------------------------------------------------
report_router = APIRouter(prefix="/api/reports", tags=["reports"])


@report_router.get("/low-stock", response_model=list[ProductResponse])
def low_stock(engine: LedgerEngine = Depends(get_engine)) -> list[ProductResponse]:
    return [ProductResponse.from_dto(d) for d in ShowStockAlertsHandler(engine).low_stock()]


@report_router.get("/out-of-stock", response_model=list[ProductResponse])
def out_of_stock(engine: LedgerEngine = Depends(get_engine)) -> list[ProductResponse]:
    return [ProductResponse.from_dto(d) for d in ShowStockAlertsHandler(engine).out_of_stock()]


@report_router.get("/inventory-value", response_model=AmountResponse)
def inventory_value(engine: LedgerEngine = Depends(get_engine)) -> AmountResponse:
    return AmountResponse(amount=ShowSalesReportHandler(engine).inventory_value())


@report_router.get("/top-selling", response_model=list[TopSellerResponse])
def top_selling(
    n: int | None = Query(default=None, ge=0),
    start: date | None = None,
    end: date | None = None,
    engine: LedgerEngine = Depends(get_engine),
    top_n: int = Depends(get_top_sellers),
) -> list[TopSellerResponse]:
    handler = ShowSalesReportHandler(engine, top_n=top_n)
    rows = handler.top_selling(n, _date_range(start, end))
    return [TopSellerResponse.from_dto(r) for r in rows]


@report_router.get("/sales-total", response_model=AmountResponse)
def sales_total(
    start: date | None = None,
    end: date | None = None,
    engine: LedgerEngine = Depends(get_engine),
) -> AmountResponse:
    return AmountResponse(
        amount=ShowSalesReportHandler(engine).sales_total(_date_range(start, end))
    )


@report_router.get("/sales-summary", response_model=SalesSummaryResponse)
def sales_summary(
    start: date | None = None,
    end: date | None = None,
    engine: LedgerEngine = Depends(get_engine),
    top_n: int = Depends(get_top_sellers),
) -> SalesSummaryResponse:
    dto = ShowSalesReportHandler(engine, top_n=top_n).handle(_date_range(start, end))
    return SalesSummaryResponse.from_dto(dto)


@report_router.get("/dashboard", response_model=DashboardResponse)
def dashboard(engine: LedgerEngine = Depends(get_engine)) -> DashboardResponse:
    return DashboardResponse.from_dto(ShowDashboardHandler(engine).handle())
