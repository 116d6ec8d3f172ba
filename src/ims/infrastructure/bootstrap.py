"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from ims.domain.service.ledger_engine import LedgerEngine
from ims.infrastructure.config import Settings
from ims.infrastructure.persistence.json_ledger_store import JsonLedgerStore


def settings() -> Settings:
    return Settings.from_env()


def ledger_store(config: Settings | None = None) -> JsonLedgerStore:
    config = config or settings()
    return JsonLedgerStore(config.data_file)


def ledger_engine(config: Settings | None = None) -> LedgerEngine:
    config = config or settings()
    return LedgerEngine(ledger_store(config))
