"""FastAPI application factory for the inventory ledger.

Usage:
    uvicorn ims.infrastructure.api.app:create_app --factory --port 5000
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ims.domain.exceptions import (
    DomainException,
    InsufficientStockError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from ims.domain.service.ledger_engine import LedgerEngine
from ims.infrastructure import bootstrap
from ims.infrastructure.api.routes import (
    customer_router,
    product_router,
    report_router,
    sale_router,
    transaction_router,
)
from ims.infrastructure.config import Settings
from ims.infrastructure.logging import configure_logging

logger = structlog.get_logger(__name__)

_STATUS_BY_ERROR: dict[type[DomainException], int] = {
    ValidationError: 400,
    InsufficientStockError: 400,
    NotFoundError: 404,
    PersistenceError: 500,
}


def _status_for(exc: DomainException) -> int:
    for error_type, status in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status
    return 400


async def _domain_error(request: Request, exc: DomainException) -> JSONResponse:
    status = _status_for(exc)
    if status >= 500:
        logger.error("Request failed", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=status, content={"error": str(exc), "code": exc.code})


async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=400,
        content={"error": f"Invalid request: {problems}", "code": ValidationError.code},
    )


def create_app(engine: LedgerEngine | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or bootstrap.settings()

    app = FastAPI(
        title="IMS Inventory Ledger",
        description="Product catalog, stock journal, sales and reports for a small shop",
    )
    if engine is None:
        # uvicorn --factory entry point
        configure_logging(settings.log_level)
        engine = bootstrap.ledger_engine(settings)
    app.state.settings = settings
    app.state.engine = engine

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(DomainException, _domain_error)
    app.add_exception_handler(RequestValidationError, _invalid_request)

    app.include_router(product_router)
    app.include_router(transaction_router)
    app.include_router(sale_router)
    app.include_router(customer_router)
    app.include_router(report_router)
    return app
