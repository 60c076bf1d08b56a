"""Data models for cinema seating."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterator, List, Optional, Sequence, Tuple
import math


class SeatState(IntEnum):
    """Seat states of the ``random-fill`` profile. The value is the display code."""

    AVAILABLE = 0
    BOOKED = 1
    BROKEN = 2
    VIP = 3

    @property
    def symbol(self) -> str:
        return str(int(self))


class BookingStatus(IntEnum):
    """Seat states of the ``vip-rows`` profile."""

    AVAILABLE = 0
    REGULAR_BOOKED = 1
    VIP_BOOKED = 2

    @property
    def symbol(self) -> str:
        return _STATUS_SYMBOLS[self]


_STATUS_SYMBOLS = {
    BookingStatus.AVAILABLE: "_",
    BookingStatus.REGULAR_BOOKED: "R",
    BookingStatus.VIP_BOOKED: "V",
}


class BookingFailure(str, Enum):
    """Why a booking call did not write anything."""

    INVALID_SIZE = "invalid_size"
    INVALID_POSITION = "invalid_position"
    NO_ROW = "no_row"
    NO_BLOCK = "no_block"
    SEATS_UNAVAILABLE = "seats_unavailable"


def parse_bool(value: object) -> bool:
    """Parse common truthy answers (``true``, ``yes``, ``y``) into bool."""
    return str(value).strip().lower() in {"true", "yes", "y", "1"}


def parse_int(value: object) -> Optional[int]:
    """Parse an integer typed by a user.

    Returns ``None`` for blanks, garbage and ``float('nan')`` as handed out
    by ``pandas`` for missing cells.
    """
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value) or not value.is_integer():
            return None
        return int(value)
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        return None


class SeatGrid:
    """Rows x cols matrix of seat states, owned by a single engine."""

    def __init__(self, rows: int, cols: int, fill: IntEnum) -> None:
        if rows < 0 or cols < 0:
            raise ValueError(f"Grid dimensions must not be negative: {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self._cells: List[List[IntEnum]] = [[fill] * cols for _ in range(rows)]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[IntEnum]]) -> "SeatGrid":
        """Build a grid from nested sequences of states. All rows must match in width."""
        widths = {len(r) for r in rows}
        if len(widths) > 1:
            raise ValueError(f"Ragged seat rows, widths found: {sorted(widths)}")
        n_cols = widths.pop() if widths else 0
        grid = cls(len(rows), n_cols, fill=SeatState.AVAILABLE)
        grid._cells = [list(r) for r in rows]
        return grid

    @property
    def size(self) -> int:
        return self.rows * self.cols

    def in_bounds(self, row: int, col: int = 0) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get(self, row: int, col: int) -> IntEnum:
        return self._cells[row][col]

    def set(self, row: int, col: int, state: IntEnum) -> None:
        self._cells[row][col] = state

    def row(self, row: int) -> Tuple[IntEnum, ...]:
        return tuple(self._cells[row])

    def count(self, *states: IntEnum) -> int:
        """Count cells equal to any of ``states``. Always a fresh scan."""
        return sum(1 for r in self._cells for s in r if s in states)

    def cells(self) -> Iterator[Tuple[int, int, IntEnum]]:
        for r, seats in enumerate(self._cells):
            for c, state in enumerate(seats):
                yield r, c, state

    def snapshot(self) -> Tuple[Tuple[IntEnum, ...], ...]:
        return tuple(tuple(r) for r in self._cells)

    def __repr__(self) -> str:
        return f"SeatGrid(rows={self.rows}, cols={self.cols})"


@dataclass
class RowStats:
    """Per row occupancy figures."""

    row: int
    available: int
    occupied: int
    broken: int = 0
    vip_eligible: bool = False
    occupancy_rate: float = 0.0


@dataclass
class BookingResult:
    """Outcome of a booking call, with a reason on failure."""

    ok: bool
    reason: Optional[BookingFailure] = None
    row: int = -1
    start_col: int = -1
    group_size: int = 0
    seats: List[Tuple[int, int]] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.ok
