from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


_WORKERS_ENV = "TIDESPEC_WORKERS"
_BLOCK_SIZE_ENV = "TIDESPEC_BLOCK_SIZE"
_VALUE_COLUMN_ENV = "TIDESPEC_VALUE_COLUMN"
_LOG_LEVEL_ENV = "LOG_LEVEL"

VALUE_COLUMNS = ("verified", "predicted")


@dataclass(frozen=True)
class Settings:
    workers: int
    block_size: int
    value_column: str
    log_level: str


def _read_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_value_column(default: str) -> str:
    value = os.getenv(_VALUE_COLUMN_ENV)
    if value is None:
        return default
    candidate = value.strip().lower()
    return candidate if candidate in VALUE_COLUMNS else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        workers=_read_positive_int(_WORKERS_ENV, 4),
        block_size=_read_positive_int(_BLOCK_SIZE_ENV, 64),
        value_column=_read_value_column("verified"),
        log_level=_read_log_level("INFO"),
    )
