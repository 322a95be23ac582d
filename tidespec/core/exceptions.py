# tidespec/core/exceptions.py
from __future__ import annotations


class TidespecError(Exception):
    """Base error for all tidespec exceptions."""


# ---- Ingestion errors ----
class IngestionError(TidespecError):
    """Raised when a record source cannot be read or does not have the expected layout."""

    def __init__(self, message: str, *, row: int | None = None) -> None:
        self.row = row
        if row is not None:
            message = f"record {row}: {message}"
        super().__init__(message)


class MalformedTimestamp(IngestionError):
    """Raised when a record's date/time fields cannot be parsed."""


# ---- Validation / construction errors ----
class InvalidTimeSeries(TidespecError):
    """Raised when a TimeSeries is constructed with invalid inputs."""


class EmptyInput(TidespecError):
    """Raised when there are no usable samples."""


class InsufficientSamples(EmptyInput):
    """Raised when an operation needs a non-zero time span (two samples or more)."""


class DegenerateSegment(TidespecError):
    """Raised when two adjacent samples share the same elapsed time."""


# ---- Sweep errors (also behave like ValueError for argument checks) ----
class InvalidRange(TidespecError, ValueError):
    """Raised when a frequency range is inverted, non-finite or has a non-positive step."""
