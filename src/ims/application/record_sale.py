"""Application service: Record Sale use case.

Orchestrates a checkout: every line is withdrawn from stock and one
Sale is recorded, or nothing happens at all.
"""

from __future__ import annotations

from typing import Any

from ims.application.dto import SaleReceiptDTO, StockTransactionDTO, sale_dto
from ims.domain.service.ledger_engine import LedgerEngine, SaleLineRequest


class RecordSaleHandler:

    def __init__(self, engine: LedgerEngine) -> None:
        self._engine = engine

    def handle(
        self,
        items: list[SaleLineRequest],
        discount_percent: Any = 0,
        payment_method: str | None = None,
        customer: str | None = None,
    ) -> SaleReceiptDTO:
        receipt = self._engine.record_sale(
            items,
            discount_percent=discount_percent,
            payment_method=payment_method,
            customer_label=customer,
        )
        names = {line.product_id: line.product_name for line in receipt.sale.lines}
        return SaleReceiptDTO(
            sale=sale_dto(receipt.sale),
            transactions=[
                StockTransactionDTO(
                    id=t.id,
                    product_id=t.product_id,
                    product_name=names[t.product_id],
                    type=t.type.value,
                    quantity=t.quantity.value,
                    notes=t.notes,
                    created_at=t.created_at,
                )
                for t in receipt.transactions
            ],
            warnings=list(receipt.warnings),
        )
