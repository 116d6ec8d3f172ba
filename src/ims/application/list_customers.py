"""Application service: List Customers use case (query)."""

from __future__ import annotations

from ims.application.dto import CustomerDTO, customer_dto
from ims.domain.service.ledger_engine import LedgerEngine


class ListCustomersHandler:

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    def handle(self, search: str | None = None) -> list[CustomerDTO]:
        """Customers in insertion order, optionally filtered by a term
        matched against name, email and phone."""
        needle = (search or "").strip().lower()
        customers = self._engine.snapshot().customers.values()
        return [
            customer_dto(c)
            for c in customers
            if not needle
            or needle in c.name.lower()
            or needle in c.email.lower()
            or needle in c.phone
        ]
