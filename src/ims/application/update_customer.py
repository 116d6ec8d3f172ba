"""Application service: Update Customer use case."""

from __future__ import annotations

from ims.application.dto import CustomerDTO, customer_dto
from ims.domain.model.customer import CustomerChanges
from ims.domain.service.ledger_engine import LedgerEngine


class UpdateCustomerHandler:

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    def handle(self, customer_id: str, changes: CustomerChanges) -> CustomerDTO:
        return customer_dto(self._engine.update_customer(customer_id, changes))
