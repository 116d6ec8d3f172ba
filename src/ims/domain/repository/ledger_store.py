"""Abstract store for the combined ledger document.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON file, in-memory)
live in the infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.model.ledger_state import LedgerState


class LedgerStore(ABC):

    @abstractmethod
    def load(self) -> LedgerState:
        """Return the last durably committed state (empty on first run)."""

    @abstractmethod
    def save(self, state: LedgerState) -> None:
        """Durably replace the stored state as one atomic unit.

        Raises PersistenceError if the write fails; the previously saved
        state must remain intact in that case.
        """
