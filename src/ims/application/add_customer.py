"""Application service: Add Customer use case."""

from __future__ import annotations

from typing import Any

from ims.application.dto import CustomerDTO, customer_dto
from ims.domain.service.ledger_engine import LedgerEngine


class AddCustomerHandler:

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    def handle(
        self,
        name: str | None,
        email: str | None = None,
        phone: str | None = None,
        loyalty_points: Any = 0,
    ) -> CustomerDTO:
        return customer_dto(
            self._engine.add_customer(name, email, phone, loyalty_points)
        )
