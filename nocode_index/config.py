from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable.

    Garbage values fall back to the default.
    """

    raw = os.environ.get(name, "").strip()
    if not raw:
        return int(default)
    try:
        return int(raw)
    except ValueError:
        return int(default)


@dataclass(frozen=True, slots=True)
class IndexerConfig:
    """Runtime configuration for the indexer and the CLI.

    - log_level: applied by the CLI to the root logger.
    - definitions_db: optional SQLite definitions store.
    - max_logged_value_chars: raw property values are truncated to this length
      before they are written to logs.
    """

    log_level: str = "INFO"
    definitions_db: Optional[Path] = None
    max_logged_value_chars: int = 200

    @classmethod
    def from_env(cls) -> "IndexerConfig":
        db = (os.environ.get("NOCODE_DEFINITIONS_DB") or "").strip()
        return cls(
            log_level=(os.environ.get("NOCODE_LOG_LEVEL") or "INFO").strip().upper(),
            definitions_db=Path(db) if db else None,
            max_logged_value_chars=max(1, _env_int("NOCODE_MAX_LOGGED_VALUE_CHARS", 200)),
        )
