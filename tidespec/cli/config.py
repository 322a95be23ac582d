from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tidespec.core import SECONDS_PER_DAY
from tidespec.io.csv_reader import ValueColumn
from tidespec.settings import get_settings

DEFAULT_START_FREQ = 0.0
DEFAULT_END_FREQ = 5.0 / SECONDS_PER_DAY  # 5 cycles per day
DEFAULT_STEPS = 30000


@dataclass(frozen=True)
class SweepConfig:
    start_freq: float
    end_freq: float
    step: float
    value_column: ValueColumn
    workers: int
    block_size: int


def default_step(start_freq: float) -> float:
    """Step giving exactly DEFAULT_STEPS steps from `start_freq` to DEFAULT_END_FREQ."""
    return (DEFAULT_END_FREQ - start_freq) / DEFAULT_STEPS


def load_config(
    start_freq: Optional[float] = None,
    end_freq: Optional[float] = None,
    step: Optional[float] = None,
    value_column: Optional[ValueColumn | str] = None,
    workers: Optional[int] = None,
    block_size: Optional[int] = None,
) -> SweepConfig:
    settings = get_settings()
    start = DEFAULT_START_FREQ if start_freq is None else start_freq
    return SweepConfig(
        start_freq=start,
        end_freq=DEFAULT_END_FREQ if end_freq is None else end_freq,
        step=default_step(start) if step is None else step,
        value_column=ValueColumn(value_column or settings.value_column),
        workers=settings.workers if workers is None else workers,
        block_size=settings.block_size if block_size is None else block_size,
    )
