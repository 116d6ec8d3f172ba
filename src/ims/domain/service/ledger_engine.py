"""Domain service: Ledger Engine.

The engine is the only writer of ledger state. Every mutating command
runs as one atomic step inside a single-writer critical section:

  1. copy the last committed state
  2. validate and mutate the copy (catalog, journal, sales, customers)
  3. durably save the copy through the LedgerStore
  4. swap the copy in as the new committed state

Any failure in 2 or 3 discards the copy, so no reader ever sees a
quantity change without its journal entry or a sale without its stock
withdrawals. Readers use ``snapshot()`` without taking the lock; they get
the last committed state, which is never mutated in place.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, TypeVar
from uuid import uuid4

import structlog

from ims.domain.exceptions import DomainException, PersistenceError, ValidationError
from ims.domain.model.customer import Customer, CustomerChanges
from ims.domain.model.ledger_state import LedgerState
from ims.domain.model.product import UNSET, Product, ProductChanges, ProductDraft
from ims.domain.model.sale import PaymentMethod, Sale, SaleLine
from ims.domain.model.stock_transaction import MovementType, StockTransaction
from ims.domain.model.value_objects import (
    Money,
    Quantity,
    parse_non_negative_int,
    parse_percent,
)
from ims.domain.repository.ledger_store import LedgerStore

logger = structlog.get_logger(__name__)

T = TypeVar("T")

ADJUSTMENT_NOTE = "Adjusted via product update"
MAX_NOTES_LENGTH = 500


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid4().hex


@dataclass(frozen=True)
class SaleLineRequest:
    """One requested line of a checkout. ``unit_price`` defaults to the
    product's current catalog price."""

    product_id: str
    quantity: Any
    unit_price: Any = None


@dataclass(frozen=True)
class StockPosting:
    """Result of an accepted stock transaction."""

    transaction: StockTransaction
    product: Product
    warning: str | None = None


@dataclass(frozen=True)
class SaleReceipt:
    sale: Sale
    transactions: tuple[StockTransaction, ...]
    warnings: tuple[str, ...] = ()


class LedgerEngine:

    def __init__(
        self,
        store: LedgerStore,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._store = store
        self._clock = clock
        self._id_factory = id_factory
        self._lock = threading.Lock()
        self._committed = store.load()

    def snapshot(self) -> LedgerState:
        """Last committed state. Treat it as read-only."""
        return self._committed

    # --- Catalog commands -----------------------------------------------------

    def create_product(self, draft: ProductDraft) -> Product:
        def apply(state: LedgerState, now: datetime) -> Product:
            return state.catalog.create(self._id_factory(), draft, now)

        product = self._execute("create_product", apply)
        return replace(product)

    def update_product(self, product_id: str, changes: ProductChanges) -> Product:
        """Merge ``changes`` over the product.

        A supplied ``quantity`` becomes a journaled add/subtract for the
        difference, so every quantity change has a journal entry.
        """

        def apply(state: LedgerState, now: datetime) -> Product:
            product = state.catalog.update(product_id, changes, now)
            if changes.quantity is not UNSET:
                target = parse_non_negative_int(changes.quantity, "Quantity")
                delta = target - product.quantity
                if delta:
                    kind = MovementType.ADD if delta > 0 else MovementType.SUBTRACT
                    self._move(state, product, kind, Quantity(abs(delta)), ADJUSTMENT_NOTE, now)
            return product

        product = self._execute("update_product", apply, product_id=product_id)
        return replace(product)

    def delete_product(self, product_id: str) -> Product:
        def apply(state: LedgerState, now: datetime) -> Product:
            return state.catalog.delete(product_id)

        return self._execute("delete_product", apply, product_id=product_id)

    # --- Stock commands -------------------------------------------------------

    def post_stock_transaction(
        self,
        product_id: str,
        movement_type: MovementType | str,
        quantity: Any,
        notes: str | None = None,
    ) -> StockPosting:
        """Apply one add/subtract movement and journal it.

        Raises InsufficientStockError if a subtract exceeds the on-hand
        quantity. A low-stock warning never blocks the commit.
        """

        def apply(state: LedgerState, now: datetime) -> StockPosting:
            if not product_id:
                raise ValidationError("Product ID is required")
            kind = MovementType.parse(movement_type)
            qty = Quantity.of(quantity)
            product = state.catalog.require(product_id)
            transaction = self._move(state, product, kind, qty, notes, now)
            warning = product.low_stock_message() if product.is_below_minimum else None
            return StockPosting(transaction, replace(product), warning)

        posting = self._execute(
            "post_stock_transaction", apply, product_id=product_id
        )
        if posting.warning:
            logger.warning(
                "Low stock",
                product_id=posting.product.id,
                quantity=posting.product.quantity,
                min_stock_level=posting.product.min_stock_level,
            )
        return posting

    def record_sale(
        self,
        lines: Sequence[SaleLineRequest],
        discount_percent: Any = 0,
        payment_method: PaymentMethod | str | None = None,
        customer_label: str | None = None,
    ) -> SaleReceipt:
        """Withdraw stock for every line and record one Sale.

        All-or-nothing: if any line names an unknown product or exceeds
        the stock left after earlier lines, nothing is committed.
        """

        def apply(state: LedgerState, now: datetime) -> SaleReceipt:
            if not lines:
                raise ValidationError("Sale must contain at least one item")
            discount = parse_percent(discount_percent)
            method = PaymentMethod.parse(payment_method)
            sale_id = self._id_factory()

            sale_lines: list[SaleLine] = []
            transactions: list[StockTransaction] = []
            touched: dict[str, Product] = {}
            for request in lines:
                product = state.catalog.require(request.product_id)
                qty = Quantity.of(request.quantity)
                unit_price = (
                    product.price
                    if request.unit_price in (None, "")
                    else Money.of(request.unit_price)
                )
                transactions.append(
                    self._move(
                        state, product, MovementType.SUBTRACT, qty, f"Sale {sale_id}", now
                    )
                )
                sale_lines.append(SaleLine(product.id, product.name, qty, unit_price))
                touched[product.id] = product

            sale = Sale.create(sale_id, sale_lines, discount, method, customer_label, now)
            state.sales.append(sale)
            warnings = tuple(
                p.low_stock_message() for p in touched.values() if p.is_below_minimum
            )
            return SaleReceipt(sale, tuple(transactions), warnings)

        receipt = self._execute("record_sale", apply, lines=len(lines))
        for warning in receipt.warnings:
            logger.warning("Low stock", sale_id=receipt.sale.id, detail=warning)
        return receipt

    # --- Customer commands ----------------------------------------------------

    def add_customer(
        self,
        name: str | None,
        email: str | None = None,
        phone: str | None = None,
        loyalty_points: Any = 0,
    ) -> Customer:
        def apply(state: LedgerState, now: datetime) -> Customer:
            customer = Customer.create(
                self._id_factory(), name, email, phone, loyalty_points, now.date()
            )
            state.customers[customer.id] = customer
            return customer

        return replace(self._execute("add_customer", apply))

    def update_customer(self, customer_id: str, changes: CustomerChanges) -> Customer:
        def apply(state: LedgerState, now: datetime) -> Customer:
            customer = state.require_customer(customer_id)
            customer.apply_changes(changes)
            return customer

        return replace(self._execute("update_customer", apply, customer_id=customer_id))

    def delete_customer(self, customer_id: str) -> Customer:
        def apply(state: LedgerState, now: datetime) -> Customer:
            state.require_customer(customer_id)
            return state.customers.pop(customer_id)

        return self._execute("delete_customer", apply, customer_id=customer_id)

    # --- Internal helpers -----------------------------------------------------

    def _move(
        self,
        state: LedgerState,
        product: Product,
        kind: MovementType,
        qty: Quantity,
        notes: str | None,
        now: datetime,
    ) -> StockTransaction:
        if kind is MovementType.ADD:
            product.receive(qty.value, now)
        else:
            product.withdraw(qty.value, now)
        transaction = StockTransaction(
            id=self._id_factory(),
            product_id=product.id,
            type=kind,
            quantity=qty,
            created_at=now,
            notes=_clean_notes(notes),
        )
        state.journal.append(transaction)
        return transaction

    def _execute(
        self,
        command: str,
        apply: Callable[[LedgerState, datetime], T],
        **context: Any,
    ) -> T:
        log = logger.bind(command=command, **context)
        with self._lock:
            working = self._committed.copy()
            try:
                result = apply(working, self._clock())
            except DomainException as exc:
                log.warning("Command rejected", code=exc.code, error=str(exc))
                raise
            try:
                self._store.save(working)
            except PersistenceError as exc:
                log.error("Commit failed, previous state kept", error=str(exc))
                raise
            self._committed = working
        log.info("Command committed")
        return result


def _clean_notes(notes: str | None) -> str | None:
    if notes is None:
        return None
    if not isinstance(notes, str):
        raise ValidationError(f"Notes must be text, got {type(notes).__name__}")
    value = notes.strip()
    if len(value) > MAX_NOTES_LENGTH:
        raise ValidationError(f"Notes cannot exceed {MAX_NOTES_LENGTH} characters")
    return value or None
