"""JSON-file-backed implementation of LedgerStore.

The whole ledger lives in one document with four top-level collections
(products, transactions, customers, sales). Every save writes a sibling
temporary file, fsyncs it and renames it over the document, so a failed
or interrupted write leaves the previous document intact.
"""

from __future__ import annotations

import json
import os
import tempfile
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path

import structlog

from ims.domain.exceptions import DomainException, PersistenceError
from ims.domain.model.catalog import Catalog
from ims.domain.model.customer import Customer
from ims.domain.model.journal import Journal
from ims.domain.model.ledger_state import LedgerState
from ims.domain.model.product import Product
from ims.domain.model.sale import PaymentMethod, Sale, SaleLine
from ims.domain.model.stock_transaction import MovementType, StockTransaction
from ims.domain.model.value_objects import Money, Quantity
from ims.domain.repository.ledger_store import LedgerStore

logger = structlog.get_logger(__name__)

COLLECTIONS = ("products", "transactions", "customers", "sales")


class JsonLedgerStore(LedgerStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    @property
    def file_path(self) -> Path:
        return self._file_path

    # --- LedgerStore interface ------------------------------------------------

    def load(self) -> LedgerState:
        raw = self._read_document()
        try:
            return LedgerState(
                catalog=Catalog(self._product_to_domain(r) for r in raw["products"]),
                journal=Journal(self._transaction_to_domain(r) for r in raw["transactions"]),
                sales=[self._sale_to_domain(r) for r in raw["sales"]],
                customers={
                    c.id: c for c in (self._customer_to_domain(r) for r in raw["customers"])
                },
            )
        except (KeyError, TypeError, ValueError, ArithmeticError, DomainException) as exc:
            raise PersistenceError(
                f"Ledger document {self._file_path} is malformed: {exc}"
            ) from exc

    def save(self, state: LedgerState) -> None:
        self._write(
            {
                "products": [self._product_to_raw(p) for p in state.catalog],
                "transactions": [self._transaction_to_raw(t) for t in state.journal],
                "customers": [self._customer_to_raw(c) for c in state.customers.values()],
                "sales": [self._sale_to_raw(s) for s in state.sales],
            }
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _product_to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "category": product.category,
            "price": str(product.price.amount),
            "quantity": product.quantity,
            "minStockLevel": product.min_stock_level,
            "createdAt": product.created_at.isoformat(),
            "updatedAt": product.updated_at.isoformat(),
        }

    @staticmethod
    def _product_to_domain(raw: dict) -> Product:
        created_at = _parse_timestamp(raw["createdAt"])
        return Product(
            id=str(raw["id"]),
            name=raw["name"],
            description=raw.get("description") or "",
            category=raw["category"],
            price=Money(Decimal(str(raw["price"]))),
            quantity=int(raw["quantity"]),
            min_stock_level=int(raw.get("minStockLevel") or 0),
            created_at=created_at,
            updated_at=_parse_timestamp(raw["updatedAt"]) if raw.get("updatedAt") else created_at,
        )

    @staticmethod
    def _transaction_to_raw(entry: StockTransaction) -> dict:
        return {
            "id": entry.id,
            "productId": entry.product_id,
            "type": entry.type.value,
            "quantity": entry.quantity.value,
            "notes": entry.notes,
            "createdAt": entry.created_at.isoformat(),
        }

    @staticmethod
    def _transaction_to_domain(raw: dict) -> StockTransaction:
        return StockTransaction(
            id=str(raw["id"]),
            product_id=str(raw["productId"]),
            type=MovementType(raw["type"]),
            quantity=Quantity(int(raw["quantity"])),
            notes=raw.get("notes"),
            created_at=_parse_timestamp(raw["createdAt"]),
        )

    @staticmethod
    def _sale_to_raw(sale: Sale) -> dict:
        return {
            "id": sale.id,
            "customer": sale.customer_label,
            "items": [
                {
                    "productId": line.product_id,
                    "productName": line.product_name,
                    "quantity": line.quantity.value,
                    "unitPrice": str(line.unit_price.amount),
                }
                for line in sale.lines
            ],
            "discountPercent": str(sale.discount_percent),
            "total": str(sale.total.amount),
            "paymentMethod": sale.payment_method.value,
            "createdAt": sale.created_at.isoformat(),
        }

    @staticmethod
    def _sale_to_domain(raw: dict) -> Sale:
        # "total" is derived; it is written for readers of the file only
        return Sale(
            id=str(raw["id"]),
            customer_label=raw["customer"],
            lines=tuple(
                SaleLine(
                    product_id=str(i["productId"]),
                    product_name=i["productName"],
                    quantity=Quantity(int(i["quantity"])),
                    unit_price=Money(Decimal(str(i["unitPrice"]))),
                )
                for i in raw["items"]
            ),
            discount_percent=Decimal(str(raw.get("discountPercent") or "0")),
            payment_method=PaymentMethod(raw.get("paymentMethod") or "cash"),
            created_at=_parse_timestamp(raw["createdAt"]),
        )

    @staticmethod
    def _customer_to_raw(customer: Customer) -> dict:
        return {
            "id": customer.id,
            "name": customer.name,
            "email": customer.email,
            "phone": customer.phone,
            "loyaltyPoints": customer.loyalty_points,
            "lastVisit": customer.last_visit.isoformat(),
        }

    @staticmethod
    def _customer_to_domain(raw: dict) -> Customer:
        return Customer(
            id=str(raw["id"]),
            name=raw["name"],
            email=raw.get("email") or "",
            phone=raw.get("phone") or "",
            loyalty_points=int(raw.get("loyaltyPoints") or 0),
            last_visit=date.fromisoformat(raw["lastVisit"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _read_document(self) -> dict[str, list]:
        if not self._file_path.exists():
            logger.info("Initializing empty ledger document", path=str(self._file_path))
            self._write(_empty_document())
            return _empty_document()

        try:
            text = self._file_path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Ledger document unreadable, starting empty",
                           path=str(self._file_path), error=str(exc))
            return _empty_document()

        if not text.strip():
            logger.info("Initializing empty ledger document", path=str(self._file_path))
            self._write(_empty_document())
            return _empty_document()

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Ledger document is not valid JSON, starting empty",
                           path=str(self._file_path), error=str(exc))
            return _empty_document()
        if not isinstance(data, dict):
            logger.warning("Ledger document has no collections, starting empty",
                           path=str(self._file_path))
            return _empty_document()

        return {key: data.get(key) or [] for key in COLLECTIONS}

    def _write(self, document: dict) -> None:
        payload = json.dumps(document, indent=2) + "\n"
        tmp_path: Path | None = None
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._file_path.parent,
                prefix=f".{self._file_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_path = Path(handle.name)
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self._file_path)
        except OSError as exc:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            logger.error("Ledger write failed", path=str(self._file_path), error=str(exc))
            raise PersistenceError(
                f"Could not write ledger to {self._file_path}: {exc}"
            ) from exc


def _empty_document() -> dict[str, list]:
    return {key: [] for key in COLLECTIONS}


def _parse_timestamp(raw: str) -> datetime:
    if not isinstance(raw, str):
        raise ValueError(f"Timestamp must be an ISO-8601 string, got {raw!r}")
    moment = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment
