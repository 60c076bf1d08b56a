import pathlib
import sys

import pytest

# Ensure src package is on path
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from cinema_seating.config import RandomFillConfig, VipRowConfig
from cinema_seating.models import (
    BookingFailure,
    BookingResult,
    BookingStatus,
    SeatGrid,
    SeatState,
    parse_bool,
    parse_int,
)


def test_grid_starts_filled():
    grid = SeatGrid(2, 3, SeatState.AVAILABLE)
    assert grid.size == 6
    assert grid.count(SeatState.AVAILABLE) == 6
    assert grid.row(1) == (SeatState.AVAILABLE,) * 3


def test_grid_rejects_negative_dimensions():
    with pytest.raises(ValueError):
        SeatGrid(-1, 3, SeatState.AVAILABLE)
    with pytest.raises(ValueError):
        SeatGrid(3, -1, SeatState.AVAILABLE)


def test_grid_allows_zero_area():
    grid = SeatGrid(0, 4, SeatState.AVAILABLE)
    assert grid.size == 0
    assert grid.count(SeatState.AVAILABLE) == 0
    assert not grid.in_bounds(0, 0)


def test_grid_set_get_and_count_several_states():
    grid = SeatGrid(2, 2, BookingStatus.AVAILABLE)
    grid.set(0, 1, BookingStatus.REGULAR_BOOKED)
    grid.set(1, 0, BookingStatus.VIP_BOOKED)
    assert grid.get(0, 1) == BookingStatus.REGULAR_BOOKED
    assert grid.count(BookingStatus.REGULAR_BOOKED, BookingStatus.VIP_BOOKED) == 2
    assert list(grid.cells())[1] == (0, 1, BookingStatus.REGULAR_BOOKED)


def test_snapshot_is_detached_from_grid():
    grid = SeatGrid(1, 2, SeatState.AVAILABLE)
    before = grid.snapshot()
    grid.set(0, 0, SeatState.BOOKED)
    assert before == ((SeatState.AVAILABLE, SeatState.AVAILABLE),)
    assert grid.snapshot() != before


def test_from_rows_rejects_ragged_rows():
    with pytest.raises(ValueError):
        SeatGrid.from_rows([[SeatState.AVAILABLE], [SeatState.AVAILABLE, SeatState.BOOKED]])


def test_symbols():
    assert [s.symbol for s in SeatState] == ["0", "1", "2", "3"]
    assert [s.symbol for s in BookingStatus] == ["_", "R", "V"]


@pytest.mark.parametrize(
    "value, expected",
    [(" 7 ", 7), ("-2", -2), ("abc", None), ("", None), (None, None),
     (float("nan"), None), (3.0, 3), (2.5, None)],
)
def test_parse_int(value, expected):
    assert parse_int(value) == expected


def test_parse_bool():
    assert parse_bool("Y")
    assert parse_bool("yes")
    assert parse_bool("true")
    assert not parse_bool("n")
    assert not parse_bool("")


def test_booking_result_truthiness():
    assert BookingResult(True)
    assert not BookingResult(False, BookingFailure.NO_ROW)


def test_random_fill_config_validation():
    with pytest.raises(ValueError):
        RandomFillConfig(available_below=70, booked_below=60)
    with pytest.raises(ValueError):
        RandomFillConfig(broken_below=101)
    with pytest.raises(ValueError):
        RandomFillConfig(vip_band=-1)
    assert RandomFillConfig().booked_below == 90


def test_vip_row_config_validation():
    with pytest.raises(ValueError):
        VipRowConfig(vip_row_end=-2)
    assert VipRowConfig(-1).vip_row_end == -1
