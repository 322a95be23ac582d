# test/test_csv_reader.py
from pathlib import Path

import numpy as np
import pytest

from tidespec.core import IngestionError
from tidespec.io.csv_reader import (
    PREDICTED_COLUMN,
    VERIFIED_COLUMN,
    ValueColumn,
    WaterLevelSample,
    read_frame,
    read_samples,
)

HEADER = "Date,Time (GMT),Predicted (m),Verified (m)\n"


def _write(tmp_path: Path, body: str, header: str = HEADER) -> Path:
    path = tmp_path / "levels.csv"
    path.write_text(header + body)
    return path


def test_read_samples_basic(tmp_path):
    path = _write(
        tmp_path,
        "2019/01/01,00:00,0.512,0.530\n"
        "2019/01/01,01:00,0.601,0.622\n",
    )
    samples = read_samples(path)
    assert [(s.date, s.time) for s in samples] == [("2019/01/01", "00:00"), ("2019/01/01", "01:00")]
    assert samples[0].predicted == pytest.approx(0.512)
    assert samples[0].verified == pytest.approx(0.530)
    assert isinstance(samples[0], WaterLevelSample)
    assert samples[1].stamp == "2019/01/01 01:00"
    assert samples[1].level() == pytest.approx(0.622)
    assert samples[1].level("predicted") == pytest.approx(0.601)


def test_read_frame_tolerates_padding_around_fields(tmp_path):
    path = _write(
        tmp_path,
        "2019/01/01, 00:00, 0.5, 0.6\n",
        header="Date, Time (GMT), Predicted (m), Verified (m)\n",
    )
    frame = read_frame(path)
    assert frame["Time (GMT)"].tolist() == ["00:00"]
    assert frame[VERIFIED_COLUMN].dtype == np.float64
    assert frame[PREDICTED_COLUMN].tolist() == [0.5]


def test_header_only_gives_no_samples(tmp_path):
    assert read_samples(_write(tmp_path, "")) == []


def test_missing_file_raises_ingestion_error(tmp_path):
    with pytest.raises(IngestionError, match="not found"):
        read_frame(tmp_path / "nope.csv")


def test_empty_file_raises_ingestion_error(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")
    with pytest.raises(IngestionError, match="empty"):
        read_frame(path)


def test_missing_column_raises_ingestion_error(tmp_path):
    path = _write(tmp_path, "2019/01/01,00:00,0.5\n", header="Date,Time (GMT),Predicted (m)\n")
    with pytest.raises(IngestionError, match="Verified"):
        read_frame(path)


def test_non_numeric_value_reports_record(tmp_path):
    path = _write(
        tmp_path,
        "2019/01/01,00:00,0.5,0.6\n"
        "2019/01/01,01:00,0.5,-\n",
    )
    with pytest.raises(IngestionError) as excinfo:
        read_frame(path)
    assert excinfo.value.row == 2
    assert "Verified (m)" in str(excinfo.value)


def test_value_column_headers():
    assert ValueColumn("verified").header == VERIFIED_COLUMN
    assert ValueColumn.predicted.header == PREDICTED_COLUMN
    with pytest.raises(ValueError):
        ValueColumn("observed")
