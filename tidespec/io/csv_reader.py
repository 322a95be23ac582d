from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
import logging

import numpy as np
import pandas as pd

from tidespec.core.exceptions import IngestionError

logger = logging.getLogger(__name__)


DATE_COLUMN = "Date"
TIME_COLUMN = "Time (GMT)"
PREDICTED_COLUMN = "Predicted (m)"
VERIFIED_COLUMN = "Verified (m)"

REQUIRED_COLUMNS = (DATE_COLUMN, TIME_COLUMN, PREDICTED_COLUMN, VERIFIED_COLUMN)

# Timestamps are "<Date> <Time (GMT)>", e.g. "2019/01/31 23:00", in UTC.
TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M"


class ValueColumn(str, Enum):
    """Which measured column feeds the time series."""

    verified = "verified"
    predicted = "predicted"

    @property
    def header(self) -> str:
        return VERIFIED_COLUMN if self is ValueColumn.verified else PREDICTED_COLUMN


@dataclass(frozen=True, slots=True)
class WaterLevelSample:
    """One record of a tide-gauge export."""

    date: str
    time: str
    predicted: float
    verified: float

    @property
    def stamp(self) -> str:
        """Raw timestamp text, to be parsed with TIMESTAMP_FORMAT."""
        return f"{self.date} {self.time}"

    def level(self, column: ValueColumn | str = ValueColumn.verified) -> float:
        return self.verified if ValueColumn(column) is ValueColumn.verified else self.predicted


def read_frame(path: str | Path) -> pd.DataFrame:
    """
    Read and validate a tide-gauge CSV export.

    Returns a DataFrame with (at least) the four REQUIRED_COLUMNS, dates and
    times as strings and both level columns as float64.

    Any problem aborts the whole read: there is no skip-and-continue.
    """
    path = Path(path)
    try:
        frame = pd.read_csv(
            path,
            dtype={DATE_COLUMN: str, TIME_COLUMN: str},
            skipinitialspace=True,
        )
    except FileNotFoundError as e:
        raise IngestionError(f"input file not found: {path}") from e
    except pd.errors.EmptyDataError as e:
        raise IngestionError(f"input file is empty: {path}") from e
    except pd.errors.ParserError as e:
        raise IngestionError(f"cannot parse {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise IngestionError(f"cannot read {path}: {e}") from e

    frame.columns = [str(c).strip() for c in frame.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
        raise IngestionError(
            f"{path} is missing column(s) {missing}; found {list(frame.columns)}"
        )

    for col in (PREDICTED_COLUMN, VERIFIED_COLUMN):
        numeric = pd.to_numeric(frame[col], errors="coerce")
        bad = np.flatnonzero(numeric.isna().to_numpy())
        if bad.size:
            i = int(bad[0])
            raise IngestionError(
                f"column {col!r} has non-numeric value {frame[col].iloc[i]!r}",
                row=i + 1,
            )
        frame[col] = numeric.astype(np.float64)

    logger.debug("Read CSV", extra={"path": str(path), "row_count": len(frame)})
    return frame


def read_samples(path: str | Path) -> list[WaterLevelSample]:
    frame = read_frame(path)
    return [
        WaterLevelSample(date=str(d), time=str(t), predicted=float(p), verified=float(v))
        for d, t, p, v in zip(
            frame[DATE_COLUMN],
            frame[TIME_COLUMN],
            frame[PREDICTED_COLUMN],
            frame[VERIFIED_COLUMN],
        )
    ]
