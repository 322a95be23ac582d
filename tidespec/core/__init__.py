# tidespec/core/__init__.py
"""
Core domain objects and algorithms for tidespec.

This module defines the format-agnostic part of the package:
- TimeSeries: validated, immutable, strictly increasing water-level series
- fourier_coefficients: exact transform of the piecewise-linear interpolant
- sweep: evaluation over an evenly stepped frequency range
- Spectrum / FrequencyPoint: sweep results

The core layer is independent from I/O and file formats.
"""

from .timeseries import DataPoint, TimeSeries, build_time_series, elapsed_seconds
from .spectrum import (
    SECONDS_PER_DAY,
    FrequencyPoint,
    Spectrum,
    amplitude_at,
    fourier_coefficient,
    fourier_coefficients,
)
from .sweep import frequency_grid, sweep
from .exceptions import (
    TidespecError,
    IngestionError,
    MalformedTimestamp,
    InvalidTimeSeries,
    EmptyInput,
    InsufficientSamples,
    DegenerateSegment,
    InvalidRange,
)


__all__ = [
    # time series
    "DataPoint",
    "TimeSeries",
    "build_time_series",
    "elapsed_seconds",

    # transform
    "SECONDS_PER_DAY",
    "FrequencyPoint",
    "Spectrum",
    "amplitude_at",
    "fourier_coefficient",
    "fourier_coefficients",
    "frequency_grid",
    "sweep",

    # exceptions
    "TidespecError",
    "IngestionError",
    "MalformedTimestamp",
    "InvalidTimeSeries",
    "EmptyInput",
    "InsufficientSamples",
    "DegenerateSegment",
    "InvalidRange",
]
