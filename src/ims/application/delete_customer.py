"""Application service: Delete Customer use case."""

from __future__ import annotations

from ims.application.dto import CustomerDTO, customer_dto
from ims.domain.service.ledger_engine import LedgerEngine


class DeleteCustomerHandler:

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    def handle(self, customer_id: str) -> CustomerDTO:
        return customer_dto(self._engine.delete_customer(customer_id))
