"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Resolve the default data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_FILE = Path(__file__).resolve().parents[3] / "data" / "database.json"


@dataclass(frozen=True)
class Settings:
    data_file: Path = _DEFAULT_DATA_FILE
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 5000
    top_sellers: int = 5

    @staticmethod
    def from_env() -> Settings:
        return Settings(
            data_file=Path(os.getenv("IMS_DATA_FILE", str(_DEFAULT_DATA_FILE))),
            log_level=os.getenv("IMS_LOG_LEVEL", "INFO").upper(),
            host=os.getenv("IMS_HOST", "127.0.0.1"),
            port=int(os.getenv("IMS_PORT", "5000")),
            top_sellers=int(os.getenv("IMS_TOP_SELLERS", "5")),
        )
