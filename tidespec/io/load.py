# tidespec/io/load.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from tidespec.core import EmptyInput, TimeSeries, build_time_series
from tidespec.io.csv_reader import (
    TIMESTAMP_FORMAT,
    ValueColumn,
    WaterLevelSample,
    read_samples,
)

logger = logging.getLogger(__name__)


def samples_to_series(
    samples: Sequence[WaterLevelSample],
    *,
    column: ValueColumn | str = ValueColumn.verified,
) -> TimeSeries:
    if not samples:
        raise EmptyInput("no samples to build a time series from.")
    column = ValueColumn(column)
    return build_time_series(
        [s.stamp for s in samples],
        [s.level(column) for s in samples],
        format=TIMESTAMP_FORMAT,
        unit="m",
        name=column.header,
    )


def load_time_series(
    path: str | Path,
    *,
    column: ValueColumn | str = ValueColumn.verified,
) -> TimeSeries:
    samples = read_samples(path)
    if not samples:
        raise EmptyInput(f"{path} contains no records.")
    ts = samples_to_series(samples, column=column)
    logger.info(
        "Loaded time series",
        extra={"path": str(path), "n_samples": ts.n, "span_s": ts.span},
    )
    return ts
