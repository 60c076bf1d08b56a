import io
import pathlib
import sys

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

from cinema_seating.config import RANDOM_FILL, VIP_ROWS, VipRowConfig
from cinema_seating.engine import RandomFillEngine, VipRowEngine
from cinema_seating.layout import grid_frame, load_layout, row_stats_frame
from cinema_seating.models import BookingStatus, SeatState


def test_load_random_fill_layout():
    engine = load_layout(io.StringIO("0,1,2\n3,0,0\n"), RANDOM_FILL)
    assert isinstance(engine, RandomFillEngine)
    assert (engine.rows, engine.cols) == (2, 3)
    assert engine.grid.get(0, 2) == SeatState.BROKEN
    assert engine.grid.get(1, 0) == SeatState.VIP
    assert engine.broken_count() == 1


def test_load_vip_rows_layout_accepts_symbols_and_codes():
    engine = load_layout(io.StringIO("_,R,V\n0,1,2\n"), VIP_ROWS)
    assert isinstance(engine, VipRowEngine)
    assert engine.grid.row(0) == engine.grid.row(1)
    assert engine.grid.get(0, 1) == BookingStatus.REGULAR_BOOKED
    assert engine.grid.get(1, 2) == BookingStatus.VIP_BOOKED
    assert engine.available_count() == 2


def test_load_layout_from_path(tmp_path):
    path = tmp_path / "hall.csv"
    path.write_text("0,0,0,0\n0,1,1,0\n0,0,0,0\n")
    engine = load_layout(path, VIP_ROWS, VipRowConfig(0))
    assert engine.vip_row_end == 0
    assert engine.booked_count() == 2
    assert engine.suggest_best_row(4) == 0


def test_single_broken_seat_layout():
    engine = load_layout(io.StringIO("2\n"), RANDOM_FILL)
    assert not engine.is_row_usable(0)
    assert not engine.can_seat_group_in_row(0, 1)
    assert not engine.book_group(1)


@pytest.mark.parametrize(
    "text, profile",
    [
        ("0,9\n", RANDOM_FILL),
        ("0,X\n", RANDOM_FILL),
        ("_,3\n", VIP_ROWS),
        ("0,0,0\n0,0\n", RANDOM_FILL),
        ("0,0\n0,0,0\n", RANDOM_FILL),
        ("", RANDOM_FILL),
    ],
)
def test_bad_layouts(text, profile):
    with pytest.raises(ValueError):
        load_layout(io.StringIO(text), profile)


def test_unknown_profile():
    with pytest.raises(ValueError):
        load_layout(io.StringIO("0\n"), "stadium")


def test_grid_frame():
    engine = load_layout(io.StringIO("0,1\n2,3\n"), RANDOM_FILL)
    df = grid_frame(engine)
    assert list(df.index) == ["Row 0", "Row 1"]
    assert list(df.columns) == [0, 1]
    assert df.loc["Row 1", 1] == "3"


def test_grid_frame_vip_symbols():
    engine = VipRowEngine.create(2, 3)
    engine.book_group(0, 1, 2, True)
    df = grid_frame(engine)
    assert df.loc["Row 0"].tolist() == ["_", "V", "V"]


def test_row_stats_frame():
    engine = VipRowEngine.create(3, 4)
    engine.book_group(1, 0, 2)
    df = row_stats_frame(engine)
    assert list(df.columns) == ["row", "available", "occupied", "broken", "vip_eligible", "occupancy_rate"]
    assert df.loc[1, "occupied"] == 2
    assert df.loc[1, "occupancy_rate"] == 50.0
    assert df["vip_eligible"].tolist() == [True, True, False]
