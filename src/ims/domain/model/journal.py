"""Transaction Journal: the append-only record of stock movements."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ims.domain.exceptions import ValidationError
from ims.domain.model.stock_transaction import StockTransaction
from ims.domain.model.value_objects import DateRange


class Journal:
    """Chronological, append-only sequence of StockTransactions.

    Entries are never updated or removed.
    """

    def __init__(self, entries: Iterable[StockTransaction] = ()) -> None:
        self._entries: list[StockTransaction] = []
        self._ids: set[str] = set()
        for entry in entries:
            self.append(entry)

    def append(self, entry: StockTransaction) -> None:
        if entry.id in self._ids:
            raise ValidationError(f"Transaction ID '{entry.id}' already recorded")
        self._entries.append(entry)
        self._ids.add(entry.id)

    def list_all(self) -> list[StockTransaction]:
        return list(self._entries)

    def list_by_product(self, product_id: str) -> list[StockTransaction]:
        return [e for e in self._entries if e.product_id == product_id]

    def list_between(self, date_range: DateRange | None) -> list[StockTransaction]:
        if date_range is None:
            return self.list_all()
        return [e for e in self._entries if date_range.contains(e.created_at)]

    def __iter__(self) -> Iterator[StockTransaction]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
