from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from tidespec.cli.config import load_config
from tidespec.cli.render import render_error, render_spectrum
from tidespec.core import TidespecError, sweep
from tidespec.io.csv_reader import ValueColumn
from tidespec.io.load import load_time_series
from tidespec.logging_config import configure_logging


app = typer.Typer(
    help="Amplitude spectrum of an irregularly sampled water-level record.",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)


@app.command()
def main(
    input_path: Path = typer.Argument(
        ...,
        dir_okay=False,
        help="CSV with Date, Time (GMT), Predicted (m) and Verified (m) columns.",
    ),
    start_freq: Optional[float] = typer.Argument(
        None, help="First frequency in Hz (default 0)."
    ),
    end_freq: Optional[float] = typer.Argument(
        None, help="Last frequency in Hz, inclusive (default 5 cycles/day)."
    ),
    step: Optional[float] = typer.Argument(
        None,
        help="Frequency step in Hz (default: 30000 steps from start to 5 cycles/day).",
    ),
    column: Optional[ValueColumn] = typer.Option(
        None,
        "--column",
        "-c",
        help="Level column to analyse (defaults to TIDESPEC_VALUE_COLUMN env or verified).",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        min=1,
        help="Worker threads for the sweep (defaults to TIDESPEC_WORKERS env or 4).",
    ),
    block_size: Optional[int] = typer.Option(
        None,
        "--block-size",
        min=1,
        help="Frequencies evaluated per task (defaults to TIDESPEC_BLOCK_SIZE env or 64).",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level on stderr (defaults to LOG_LEVEL env or INFO).",
    ),
) -> None:
    """Print "<cycles per day> <amplitude>" for each swept frequency."""
    configure_logging(log_level.upper() if log_level else None)
    config = load_config(
        start_freq=start_freq,
        end_freq=end_freq,
        step=step,
        value_column=column,
        workers=workers,
        block_size=block_size,
    )

    try:
        series = load_time_series(input_path, column=config.value_column)
        spectrum = sweep(
            series,
            config.start_freq,
            config.end_freq,
            config.step,
            workers=config.workers,
            block_size=config.block_size,
        )
    except TidespecError as e:
        render_error(str(e))
        raise typer.Exit(code=1) from e

    render_spectrum(spectrum)
