from __future__ import annotations

import typer

from tidespec.core import Spectrum
from tidespec.io.emit import iter_lines


def render_spectrum(spectrum: Spectrum) -> None:
    for line in iter_lines(spectrum):
        typer.echo(line)


def render_error(message: str) -> None:
    typer.secho(f"error: {message}", fg=typer.colors.RED, err=True)
