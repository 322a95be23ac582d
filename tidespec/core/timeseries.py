# tidespec/core/timeseries.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Sequence

import numpy as np
import pandas as pd

from .exceptions import (
    DegenerateSegment,
    EmptyInput,
    InvalidTimeSeries,
    MalformedTimestamp,
)


@dataclass(frozen=True, slots=True)
class DataPoint:
    """One sample of a TimeSeries: seconds since the first sample and the level."""

    time: float
    water_level: float


@dataclass(frozen=True, slots=True)
class TimeSeries:
    """
    Immutable, strictly increasing time series of water levels.

    `time` is in seconds. Series built with `build_time_series` start at 0,
    but any origin is accepted: integration only depends on the spacing and
    on `t_end - t_start`.

    Both arrays are copied and flagged read-only on construction, so a series
    can be shared between worker threads without locking.
    """

    time: np.ndarray = field(repr=False)
    values: np.ndarray = field(repr=False)
    unit: str | None = None
    name: str | None = None
    attrs: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        try:
            t = np.array(self.time, dtype=np.float64)
            v = np.array(self.values, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidTimeSeries(f"`time` and `values` must be numeric: {e}") from e

        if t.ndim != 1:
            raise InvalidTimeSeries(f"`time` must be 1D, got shape {t.shape}")
        if v.ndim != 1:
            raise InvalidTimeSeries(f"`values` must be 1D, got shape {v.shape}")
        if t.size != v.size:
            raise InvalidTimeSeries(
                f"`time` and `values` must have same length, got {t.size} vs {v.size}"
            )
        if t.size == 0:
            raise EmptyInput("TimeSeries needs at least one sample.")

        if not np.isfinite(t).all():
            raise InvalidTimeSeries("`time` contains non-finite values (NaN/Inf).")
        if not np.isfinite(v).all():
            raise InvalidTimeSeries("`values` contains non-finite values (NaN/Inf).")

        dt = np.diff(t)
        backwards = np.flatnonzero(dt < 0)
        if backwards.size:
            i = int(backwards[0])
            raise InvalidTimeSeries(
                f"`time` must be strictly increasing: t[{i + 1}]={t[i + 1]} < t[{i}]={t[i]}"
            )
        repeated = np.flatnonzero(dt == 0)
        if repeated.size:
            i = int(repeated[0])
            raise DegenerateSegment(
                f"samples {i} and {i + 1} share the same time ({t[i]} s); "
                "the segment between them has no duration."
            )

        if self.attrs is None:
            object.__setattr__(self, "attrs", {})
        elif not isinstance(self.attrs, dict):
            raise InvalidTimeSeries("`attrs` must be a dict.")

        t.flags.writeable = False
        v.flags.writeable = False
        object.__setattr__(self, "time", t)
        object.__setattr__(self, "values", v)

    @property
    def n(self) -> int:
        return int(self.time.size)

    @property
    def n_segments(self) -> int:
        return self.n - 1

    @property
    def t_start(self) -> float:
        return float(self.time[0])

    @property
    def t_end(self) -> float:
        return float(self.time[-1])

    @property
    def span(self) -> float:
        """Covered duration in seconds (0 for a single sample)."""
        return self.t_end - self.t_start

    def points(self) -> Iterator[DataPoint]:
        for t, v in zip(self.time.tolist(), self.values.tolist()):
            yield DataPoint(time=t, water_level=v)

    def mean(self) -> float:
        """Time-weighted mean of the piecewise-linear interpolant."""
        if self.n == 1:
            return float(self.values[0])
        v = self.values
        area = np.sum(0.5 * (v[:-1] + v[1:]) * np.diff(self.time))
        return float(area / self.span)

    def to_numpy(self, *, copy: bool = False) -> tuple[np.ndarray, np.ndarray]:
        if copy:
            return self.time.copy(), self.values.copy()
        return self.time, self.values


def elapsed_seconds(
    timestamps: Sequence[Any] | pd.DatetimeIndex,
    *,
    format: str | None = None,
) -> tuple[np.ndarray, pd.Timestamp]:
    """
    Convert timestamps to whole seconds elapsed since the first one.

    Naive timestamps are taken as UTC. Sub-second parts of each difference
    are truncated toward zero.

    Returns
    -------
    (seconds, epoch)
        Float array of elapsed seconds and the first timestamp.
    """
    if len(timestamps) == 0:
        raise EmptyInput("No timestamps given.")

    stamps = pd.to_datetime(pd.Index(timestamps), format=format, utc=True, errors="coerce")
    bad = np.flatnonzero(pd.isna(stamps))
    if bad.size:
        i = int(bad[0])
        raise MalformedTimestamp(f"cannot parse timestamp {timestamps[i]!r}", row=i + 1)

    deltas = (stamps - stamps[0]).total_seconds()
    seconds = np.trunc(np.asarray(deltas, dtype=np.float64))
    return seconds, stamps[0]


def build_time_series(
    timestamps: Sequence[Any] | pd.DatetimeIndex,
    levels: Sequence[float] | np.ndarray,
    *,
    format: str | None = None,
    unit: str | None = None,
    name: str | None = None,
) -> TimeSeries:
    """
    Build a zero-based TimeSeries from absolute timestamps and levels.

    The first sample gets `time = 0`; the others get the whole number of
    seconds elapsed since it. The absolute start is kept in `attrs["epoch"]`.
    """
    if len(timestamps) != len(levels):
        raise InvalidTimeSeries(
            f"timestamps and levels must have same length, got {len(timestamps)} vs {len(levels)}"
        )
    seconds, epoch = elapsed_seconds(timestamps, format=format)
    return TimeSeries(
        time=seconds,
        values=levels,
        unit=unit,
        name=name,
        attrs={"epoch": epoch.isoformat()},
    )
