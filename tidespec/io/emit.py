from __future__ import annotations

from typing import Iterator

from tidespec.core import FrequencyPoint, Spectrum


def format_point(point: FrequencyPoint) -> str:
    """`"<cycles per day> <amplitude>"`, space separated."""
    return f"{point.freq_per_day} {point.amplitude}"


def iter_lines(spectrum: Spectrum) -> Iterator[str]:
    """One formatted line per frequency, ascending."""
    for point in spectrum:
        yield format_point(point)
