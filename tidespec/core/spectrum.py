"""Exact Fourier coefficients of a piecewise-linear time series.

The signal is taken to be the straight line between consecutive samples, so
the transform integral can be evaluated in closed form segment by segment
instead of by quadrature or FFT. Sample spacing does not need to be uniform.

Convention
----------
For a frequency ``f`` in Hz the coefficient is

.. math::

    X(f) = \\frac{1}{T} \\int_{t_0}^{t_0 + T} level(t)\\, e^{-2\\pi i f t}\\, dt

with ``T`` the covered time span. A real sinusoid of amplitude ``A`` at
``f0`` therefore shows up with ``|X| = A/2`` at both ``+f0`` and ``-f0``, and
``X(0)`` is the time-weighted mean level.

Functions
---------
fourier_coefficients
    Complex coefficients for an array of frequencies.
fourier_coefficient
    Complex coefficient for a single frequency.
amplitude_at
    ``|fourier_coefficient|``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

from .exceptions import InsufficientSamples, InvalidRange
from .timeseries import TimeSeries

SECONDS_PER_DAY = 86400.0

# Below this |c*dt| the closed-form weights lose digits to cancellation and
# their Taylor expansion is used instead (truncation error ~|x|**6 / 40320).
_SERIES_CUTOFF = 1e-2

# Taylor coefficients, highest order first (np.polyval order).
# w1(x) = (e^x - 1 - x) / x^2        = sum_k x^k / (k+2)!
# w2(x) = (x e^x - e^x + 1) / x^2    = sum_k (k+1) x^k / (k+2)!
_W1_SERIES = np.array([1 / 5040, 1 / 720, 1 / 120, 1 / 24, 1 / 6, 1 / 2])
_W2_SERIES = np.array([1 / 840, 1 / 144, 1 / 30, 1 / 8, 1 / 3, 1 / 2])


@dataclass(frozen=True, slots=True)
class FrequencyPoint:
    """Amplitude of the spectrum at one frequency (Hz)."""

    freq: float
    amplitude: float

    @property
    def freq_per_day(self) -> float:
        return self.freq * SECONDS_PER_DAY


@dataclass(frozen=True, slots=True)
class Spectrum:
    """Complex Fourier coefficients over an ascending frequency grid.

    Attributes
    ----------
    freq:
        Frequencies in Hz, strictly ascending.
    coeff:
        Complex coefficients, same length as ``freq``.
    """

    freq: np.ndarray = field(repr=False)
    coeff: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        f = np.asarray(self.freq, dtype=np.float64)
        c = np.asarray(self.coeff, dtype=np.complex128)
        if f.ndim != 1 or c.ndim != 1:
            raise ValueError(f"freq and coeff must be 1D, got shapes {f.shape} and {c.shape}")
        if f.size != c.size:
            raise ValueError(f"freq and coeff must have same length, got {f.size} vs {c.size}")
        if np.any(np.diff(f) <= 0):
            raise ValueError("freq must be strictly ascending.")
        object.__setattr__(self, "freq", f)
        object.__setattr__(self, "coeff", c)

    @property
    def amplitude(self) -> np.ndarray:
        return np.abs(self.coeff)

    @property
    def freq_per_day(self) -> np.ndarray:
        return self.freq * SECONDS_PER_DAY

    def __len__(self) -> int:
        return int(self.freq.size)

    def __getitem__(self, i: int) -> FrequencyPoint:
        return FrequencyPoint(freq=float(self.freq[i]), amplitude=float(abs(self.coeff[i])))

    def __iter__(self) -> Iterator[FrequencyPoint]:
        for f, a in zip(self.freq.tolist(), self.amplitude.tolist()):
            yield FrequencyPoint(freq=f, amplitude=a)


def _segment_weights(x: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Weights of the left/right sample values in a segment integral.

    For a segment of duration ``dt`` starting at ``t1`` and ``x = c*dt``::

        int_{t1}^{t1+dt} line(t) e^{c t} dt = dt * e^{c t1} * (v1*w1(x) + v2*w2(x))

    This is ``F(t2) - F(t1)`` for the antiderivative
    ``F(t) = (a t + b - a/c) / c * e^{c t}``, rewritten relative to ``t1``.
    """
    w1 = np.empty_like(x)
    w2 = np.empty_like(x)

    small = np.abs(x) < _SERIES_CUTOFF
    xs = x[small]
    w1[small] = np.polyval(_W1_SERIES, xs)
    w2[small] = np.polyval(_W2_SERIES, xs)

    big = ~small
    xb = x[big]
    em1 = np.expm1(xb)
    xb2 = xb * xb
    w1[big] = (em1 - xb) / xb2
    w2[big] = (xb * (em1 + 1.0) - em1) / xb2
    return w1, w2


def _coefficients(series: TimeSeries, freqs: np.ndarray) -> np.ndarray:
    t, v = series.to_numpy()
    t1 = t[:-1]
    dt = np.diff(t)
    v1 = v[:-1]
    v2 = v[1:]
    span = series.span

    out = np.empty(freqs.size, dtype=np.complex128)

    # f = 0: the kernel is 1 and each segment is a trapezoid.
    zero = freqs == 0.0
    if np.any(zero):
        out[zero] = np.sum(0.5 * (v1 + v2) * dt) / span

    nonzero = ~zero
    if np.any(nonzero):
        c = (-2j * np.pi) * freqs[nonzero][:, None]
        w1, w2 = _segment_weights(c * dt)
        contrib = dt * np.exp(c * t1) * (v1 * w1 + v2 * w2)
        out[nonzero] = contrib.sum(axis=1) / span

    return out


def fourier_coefficients(series: TimeSeries, freqs) -> np.ndarray:
    """Compute exact Fourier coefficients of ``series`` at each frequency.

    Parameters
    ----------
    series:
        At least two samples.
    freqs:
        Frequencies in Hz (scalar or 1D array). Negative values are allowed.

    Returns
    -------
    np.ndarray
        Complex coefficients, shape ``(len(freqs),)``, normalised by the
        covered time span.
    """
    if series.n < 2:
        raise InsufficientSamples(
            f"at least two samples are needed to integrate, got {series.n}"
        )
    f = np.atleast_1d(np.asarray(freqs, dtype=np.float64))
    if f.ndim != 1:
        raise InvalidRange(f"freqs must be 1D, got shape {f.shape}")
    if not np.isfinite(f).all():
        raise InvalidRange("freqs contains non-finite values (NaN/Inf).")
    return _coefficients(series, f)


def fourier_coefficient(series: TimeSeries, freq: float) -> complex:
    return complex(fourier_coefficients(series, [freq])[0])


def amplitude_at(series: TimeSeries, freq: float) -> float:
    return abs(fourier_coefficient(series, freq))
