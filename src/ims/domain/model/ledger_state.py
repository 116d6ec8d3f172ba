"""LedgerState: the combined dataset the engine commits as one unit."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from ims.domain.exceptions import NotFoundError
from ims.domain.model.catalog import Catalog
from ims.domain.model.customer import Customer
from ims.domain.model.journal import Journal
from ims.domain.model.sale import Sale


@dataclass
class LedgerState:
    """Catalog, journal, sales and customers, as persisted together.

    A committed state is never mutated; the engine works on a ``copy()``
    and swaps it in only after the durable write succeeds.
    """

    catalog: Catalog = field(default_factory=Catalog)
    journal: Journal = field(default_factory=Journal)
    sales: list[Sale] = field(default_factory=list)
    customers: dict[str, Customer] = field(default_factory=dict)

    def copy(self) -> LedgerState:
        return copy.deepcopy(self)

    def require_customer(self, customer_id: str) -> Customer:
        customer = self.customers.get(customer_id)
        if customer is None:
            raise NotFoundError(f"Customer with ID '{customer_id}' not found")
        return customer
