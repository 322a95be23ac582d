# test/test_timeseries.py
from datetime import datetime, timezone

import numpy as np
import pytest

from tidespec.core.timeseries import DataPoint, TimeSeries, build_time_series, elapsed_seconds
from tidespec.core.exceptions import (
    DegenerateSegment,
    EmptyInput,
    InvalidTimeSeries,
    MalformedTimestamp,
)


def test_init_ok_basic():
    t = np.array([0.0, 1.0, 2.0])
    v = np.array([10.0, 20.0, 30.0])
    ts = TimeSeries(time=t, values=v, unit="m", name="Verified (m)")

    assert ts.n == 3
    assert ts.n_segments == 2
    assert ts.t_start == 0.0
    assert ts.t_end == 2.0
    assert ts.span == 2.0
    assert ts.unit == "m"
    assert ts.name == "Verified (m)"


def test_init_rejects_non_1d():
    t = np.array([[0.0, 1.0]])
    v = np.array([1.0, 2.0])
    with pytest.raises(InvalidTimeSeries):
        TimeSeries(time=t, values=v)


def test_init_rejects_length_mismatch():
    t = np.array([0.0, 1.0, 2.0])
    v = np.array([1.0, 2.0])
    with pytest.raises(InvalidTimeSeries):
        TimeSeries(time=t, values=v)


def test_init_rejects_empty():
    with pytest.raises(EmptyInput):
        TimeSeries(time=np.array([]), values=np.array([]))


def test_init_rejects_non_finite_time_and_values():
    with pytest.raises(InvalidTimeSeries):
        TimeSeries(time=np.array([0.0, np.nan, 2.0]), values=np.array([1.0, 2.0, 3.0]))
    with pytest.raises(InvalidTimeSeries):
        TimeSeries(time=np.array([0.0, 1.0, 2.0]), values=np.array([1.0, np.inf, 3.0]))


def test_init_rejects_non_numeric_values():
    with pytest.raises(InvalidTimeSeries):
        TimeSeries(time=[0.0, 1.0], values=["a", "b"])


def test_init_rejects_out_of_order_time():
    t = np.array([0.0, 2.0, 1.0])
    v = np.array([1.0, 2.0, 3.0])
    with pytest.raises(InvalidTimeSeries):
        TimeSeries(time=t, values=v)


def test_duplicate_times_raise_degenerate_segment():
    t = np.array([0.0, 1.0, 1.0, 2.0])
    v = np.array([1.0, 2.0, 3.0, 4.0])
    with pytest.raises(DegenerateSegment):
        TimeSeries(time=t, values=v)


def test_single_sample_is_allowed():
    ts = TimeSeries(time=[0.0], values=[0.7])
    assert ts.n == 1
    assert ts.span == 0.0
    assert ts.mean() == 0.7


def test_arrays_are_copied_and_read_only():
    t = np.array([0.0, 1.0, 2.0])
    v = np.array([1.0, 2.0, 3.0])
    ts = TimeSeries(time=t, values=v)

    t[0] = -5.0
    assert ts.time[0] == 0.0
    with pytest.raises(ValueError):
        ts.values[0] = 42.0


def test_points_yields_datapoints():
    ts = TimeSeries(time=[0.0, 3600.0], values=[1.0, 2.0])
    assert list(ts.points()) == [
        DataPoint(time=0.0, water_level=1.0),
        DataPoint(time=3600.0, water_level=2.0),
    ]


def test_mean_is_time_weighted():
    # 1 h at a constant 1.0, then a 2 h ramp from 1.0 to 4.0
    ts = TimeSeries(time=[0.0, 3600.0, 10800.0], values=[1.0, 1.0, 4.0])
    expected = (1.0 * 3600.0 + 2.5 * 7200.0) / 10800.0
    assert ts.mean() == pytest.approx(expected)


def test_to_numpy_copy_flag():
    t = np.array([0.0, 1.0, 2.0])
    v = np.array([1.0, 2.0, 3.0])
    ts = TimeSeries(time=t, values=v)

    t_view, v_view = ts.to_numpy(copy=False)
    t_cp, v_cp = ts.to_numpy(copy=True)

    assert t_view is ts.time and v_view is ts.values
    assert t_cp is not ts.time and v_cp is not ts.values
    assert np.allclose(t_cp, ts.time) and np.allclose(v_cp, ts.values)


def test_elapsed_seconds_zero_based_with_format():
    seconds, epoch = elapsed_seconds(
        ["2019/01/01 00:00", "2019/01/01 01:00", "2019/01/02 00:06"],
        format="%Y/%m/%d %H:%M",
    )
    assert np.array_equal(seconds, [0.0, 3600.0, 86760.0])
    assert epoch == datetime(2019, 1, 1, tzinfo=timezone.utc)


def test_elapsed_seconds_truncates_sub_second():
    seconds, _ = elapsed_seconds(
        [
            datetime(2020, 5, 1, 0, 0, 0),
            datetime(2020, 5, 1, 0, 0, 1, 900000),
            datetime(2020, 5, 1, 0, 0, 10, 500000),
        ]
    )
    assert np.array_equal(seconds, [0.0, 1.0, 10.0])


def test_elapsed_seconds_rejects_malformed():
    with pytest.raises(MalformedTimestamp) as excinfo:
        elapsed_seconds(["2019/01/01 00:00", "not a date"], format="%Y/%m/%d %H:%M")
    assert excinfo.value.row == 2


def test_elapsed_seconds_rejects_empty():
    with pytest.raises(EmptyInput):
        elapsed_seconds([])


def test_build_time_series_keeps_epoch_and_metadata():
    ts = build_time_series(
        ["2019/03/10 12:00", "2019/03/10 13:00"],
        [0.5, 0.8],
        format="%Y/%m/%d %H:%M",
        unit="m",
        name="Verified (m)",
    )
    assert np.array_equal(ts.time, [0.0, 3600.0])
    assert np.array_equal(ts.values, [0.5, 0.8])
    assert ts.attrs["epoch"] == "2019-03-10T12:00:00+00:00"
    assert ts.unit == "m"


def test_build_time_series_rejects_duplicates_and_length_mismatch():
    with pytest.raises(DegenerateSegment):
        build_time_series(["2019/03/10 12:00", "2019/03/10 12:00"], [0.5, 0.8])
    with pytest.raises(InvalidTimeSeries):
        build_time_series(["2019/03/10 12:00"], [0.5, 0.8])
