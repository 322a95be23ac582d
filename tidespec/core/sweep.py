# tidespec/core/sweep.py
from __future__ import annotations

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from tidespec.settings import get_settings

from .exceptions import InsufficientSamples, InvalidRange
from .spectrum import Spectrum, fourier_coefficients
from .timeseries import TimeSeries

logger = logging.getLogger(__name__)

# Relative slack when counting steps, so that an `end` reached up to
# rounding (e.g. (end - start) / step == 29999.999999) is still included.
_STEP_TOLERANCE = 1e-9


def frequency_grid(start: float, end: float, step: float) -> np.ndarray:
    """
    Frequencies `start, start + step, ...` up to and including `end`.

    Each value is computed as `start + k * step` (no accumulated drift) and
    none exceeds `end`.
    """
    for label, value in (("start", start), ("end", end), ("step", step)):
        if not math.isfinite(value):
            raise InvalidRange(f"{label} must be finite, got {value!r}")
    if step <= 0:
        raise InvalidRange(f"step must be > 0, got {step!r}")
    if start > end:
        raise InvalidRange(f"start ({start!r}) must not exceed end ({end!r})")

    n_steps = math.floor((end - start) / step + _STEP_TOLERANCE)
    freqs = start + step * np.arange(n_steps + 1, dtype=np.float64)
    return np.minimum(freqs, end)


def sweep(
    series: TimeSeries,
    start: float,
    end: float,
    step: float,
    *,
    workers: int | None = None,
    block_size: int | None = None,
) -> Spectrum:
    """
    Evaluate the Fourier coefficient of `series` over a frequency range.

    The grid is split into blocks of `block_size` frequencies which are
    evaluated concurrently on `workers` threads and reassembled in ascending
    order. Range errors are raised before any computation starts.
    """
    freqs = frequency_grid(start, end, step)
    if series.n < 2:
        raise InsufficientSamples(
            f"at least two samples are needed to integrate, got {series.n}"
        )

    settings = get_settings()
    workers = settings.workers if workers is None else int(workers)
    block_size = settings.block_size if block_size is None else int(block_size)
    if workers <= 0:
        raise ValueError(f"workers must be > 0, got {workers}")
    if block_size <= 0:
        raise ValueError(f"block_size must be > 0, got {block_size}")

    n_blocks = max(1, math.ceil(freqs.size / block_size))
    blocks = np.array_split(freqs, n_blocks)

    logger.info(
        "Starting frequency sweep",
        extra={
            "n_freqs": freqs.size,
            "n_samples": series.n,
            "workers": workers,
            "block_size": block_size,
        },
    )
    started = time.perf_counter()

    if workers == 1 or n_blocks == 1:
        parts = [fourier_coefficients(series, block) for block in blocks]
    else:
        with ThreadPoolExecutor(max_workers=min(workers, n_blocks)) as executor:
            # map() yields in submission order, which keeps the output ascending
            parts = list(executor.map(lambda block: fourier_coefficients(series, block), blocks))

    spectrum = Spectrum(freq=freqs, coeff=np.concatenate(parts))
    logger.info(
        "Frequency sweep finished",
        extra={
            "n_freqs": len(spectrum),
            "elapsed_ms": round((time.perf_counter() - started) * 1000.0, 3),
        },
    )
    return spectrum
