"""
Seating engines.

Two seat models are supported, each behind its own profile:

    random-fill: seats are Available, Booked, Broken or VIP. The grid is
                 seeded at random, groups are placed automatically in the
                 row with the most free seats and never next to a broken seat.
    vip-rows:    seats are Available, RegularBooked or VipBooked. The grid
                 starts empty, callers pick the block and the front rows
                 turn VIP bookings into VipBooked seats.

Queries never raise on bad input. They answer ``False`` or ``-1``.
"""
from __future__ import annotations

import logging
import random
from enum import IntEnum
from typing import Dict, List, Optional, Tuple, Type

from .config import (
    DEFAULT_VIP_ROWS_SHAPE,
    RANDOM_FILL,
    VIP_ROWS,
    RandomFillConfig,
    VipRowConfig,
)
from .models import (
    BookingFailure,
    BookingResult,
    BookingStatus,
    RowStats,
    SeatGrid,
    SeatState,
)

logger = logging.getLogger(__name__)


# ----------------------------- shared helpers -----------------------------
def middle_band(rows: int, band: int = 4) -> Tuple[int, int]:
    """Return ``(start, end)`` of the ``band`` middle rows, end exclusive."""
    start = max(0, (rows - band) // 2)
    return start, min(rows, start + band)


def _percent(part: int, whole: int) -> float:
    return part * 100.0 / whole if whole else 0.0


# ----------------------------- base engine -----------------------------
class SeatingEngine:
    """Common queries over an owned :class:`SeatGrid`.

    Subclasses decide which states count as free and occupied and how
    groups are fitted and booked.
    """

    profile: str = ""
    available_state: IntEnum = SeatState.AVAILABLE
    broken_states: Tuple[IntEnum, ...] = ()

    def __init__(self, grid: SeatGrid) -> None:
        self.grid = grid

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def cols(self) -> int:
        return self.grid.cols

    # counting
    def available_count(self) -> int:
        raise NotImplementedError

    def booked_count(self) -> int:
        raise NotImplementedError

    def broken_count(self) -> int:
        raise NotImplementedError

    def vip_count(self) -> int:
        raise NotImplementedError

    def occupied_count(self) -> int:
        raise NotImplementedError

    def occupancy_rate(self) -> float:
        """Percentage of seats occupied, ``0.0`` for an empty grid."""
        return _percent(self.occupied_count(), self.grid.size)

    def summary(self) -> Dict[str, object]:
        return {
            "profile": self.profile,
            "rows": self.rows,
            "cols": self.cols,
            "available": self.available_count(),
            "booked": self.booked_count(),
            "broken": self.broken_count(),
            "vip": self.vip_count(),
            "occupancy_rate": self.occupancy_rate(),
        }

    # row level
    def is_row_usable(self, row: int) -> bool:
        raise NotImplementedError

    def is_vip_row(self, row: int) -> bool:
        raise NotImplementedError

    def can_seat_group_in_row(self, row: int, group_size: int) -> bool:
        return self.find_block_start_in_row(row, group_size) != -1

    def find_block_start_in_row(self, row: int, group_size: int) -> int:
        raise NotImplementedError

    def suggest_best_row(self, group_size: int) -> int:
        raise NotImplementedError

    def _valid_group(self, row: int, group_size: int) -> bool:
        return 0 <= row < self.rows and 1 <= group_size <= self.cols

    def analyze_rows(self) -> List[RowStats]:
        """Available, occupied and broken seats for every row."""
        stats = []
        for r in range(self.rows):
            seats = self.grid.row(r)
            available = sum(1 for s in seats if s == self.available_state)
            broken = sum(1 for s in seats if s in self.broken_states)
            occupied = len(seats) - available - broken
            stats.append(
                RowStats(
                    row=r,
                    available=available,
                    occupied=occupied,
                    broken=broken,
                    vip_eligible=self.is_vip_row(r),
                    occupancy_rate=_percent(occupied, self.cols),
                )
            )
        return stats

    def render_row_analysis(self) -> str:
        lines = ["--- ROW ANALYSIS ---"]
        total_available = total_occupied = 0
        for s in self.analyze_rows():
            total_available += s.available
            total_occupied += s.occupied
            label = " [VIP]" if s.vip_eligible else ""
            lines.append(
                f"Row {s.row}{label}: {s.available} available, {s.occupied} booked "
                f"({s.occupancy_rate:.0f}% full)"
            )
        overall = _percent(total_occupied, self.grid.size)
        lines.append("")
        lines.append(
            f"Total: {total_available} available, {total_occupied} booked. "
            f"Overall occupancy: {overall:.0f}%"
        )
        return "\n".join(lines)

    # mutation
    def book_group(self, *args, **kwargs) -> bool:
        return self.book_group_detailed(*args, **kwargs).ok

    def book_group_detailed(self, *args, **kwargs) -> BookingResult:
        raise NotImplementedError

    def render_grid(self) -> str:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rows={self.rows}, cols={self.cols})"


# ----------------------------- random-fill -----------------------------
class RandomFillEngine(SeatingEngine):
    """Four state auditorium with broken seats and a VIP middle band."""

    profile = RANDOM_FILL
    broken_states = (SeatState.BROKEN,)

    def __init__(self, grid: SeatGrid, config: Optional[RandomFillConfig] = None) -> None:
        super().__init__(grid)
        self.config = config or RandomFillConfig()
        self.mid_start, self.mid_end = middle_band(grid.rows, self.config.vip_band)

    @classmethod
    def create(
        cls,
        rows: int,
        cols: int,
        seed: Optional[int] = None,
        config: Optional[RandomFillConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> "RandomFillEngine":
        """Seed a new auditorium from independent percentage rolls per seat."""
        config = config or RandomFillConfig()
        rng = rng or random.Random(seed)
        grid = SeatGrid(rows, cols, fill=SeatState.AVAILABLE)
        mid_start, mid_end = middle_band(rows, config.vip_band)
        for r in range(rows):
            in_band = mid_start <= r < mid_end
            for c in range(cols):
                roll = int(rng.random() * 100)
                if roll < config.available_below:
                    state = SeatState.AVAILABLE
                elif roll < config.booked_below:
                    state = SeatState.BOOKED
                elif roll < config.broken_below:
                    state = SeatState.BROKEN
                else:
                    state = SeatState.VIP if in_band else SeatState.AVAILABLE
                grid.set(r, c, state)
        engine = cls(grid, config)
        logger.info(
            "Created %s auditorium %dx%d (seed=%s): %d available, %d booked, %d broken, %d VIP",
            RANDOM_FILL, rows, cols, seed,
            engine.available_count(), engine.booked_count(),
            engine.broken_count(), engine.vip_count(),
        )
        return engine

    def available_count(self) -> int:
        return self.grid.count(SeatState.AVAILABLE)

    def booked_count(self) -> int:
        return self.grid.count(SeatState.BOOKED)

    def broken_count(self) -> int:
        return self.grid.count(SeatState.BROKEN)

    def vip_count(self) -> int:
        return self.grid.count(SeatState.VIP)

    def occupied_count(self) -> int:
        return self.booked_count() + self.vip_count()

    def is_vip_row(self, row: int) -> bool:
        return 0 <= row < self.rows and self.mid_start <= row < self.mid_end

    def is_row_usable(self, row: int) -> bool:
        """A row needs a free seat and at least one seat that is not broken.

        The second check is implied by the first but is kept on its own.
        """
        if not 0 <= row < self.rows:
            return False
        seats = self.grid.row(row)
        has_available = any(s == SeatState.AVAILABLE for s in seats)
        has_non_broken = any(s != SeatState.BROKEN for s in seats)
        return has_available and has_non_broken

    def _window_fits(self, row: int, start: int, group_size: int) -> bool:
        seats = self.grid.row(row)
        for c in range(start, start + group_size):
            if seats[c] not in (SeatState.AVAILABLE, SeatState.VIP):
                return False
            left_broken = c > 0 and seats[c - 1] == SeatState.BROKEN
            right_broken = c < self.cols - 1 and seats[c + 1] == SeatState.BROKEN
            if left_broken or right_broken:
                return False
        return True

    def find_block_start_in_row(self, row: int, group_size: int) -> int:
        """First start column of a free or VIP window clear of broken neighbours."""
        if not self._valid_group(row, group_size):
            return -1
        for start in range(self.cols - group_size + 1):
            if self._window_fits(row, start, group_size):
                return start
        return -1

    def suggest_best_row(self, group_size: int) -> int:
        """Row with the most available seats that fits the group, lowest index on ties."""
        if not 1 <= group_size <= self.cols:
            return -1
        best_row = -1
        most_available = -1
        for r in range(self.rows):
            if not self.can_seat_group_in_row(r, group_size):
                continue
            avail = sum(1 for s in self.grid.row(r) if s == SeatState.AVAILABLE)
            if avail > most_available:
                most_available = avail
                best_row = r
        return best_row

    def book_group_detailed(self, group_size: int) -> BookingResult:
        """Book the first fitting block in the suggested row.

        Only available seats become booked, VIP seats inside the block keep
        their state.
        """
        if not 1 <= group_size <= self.cols:
            logger.debug("Rejected booking of %d seats: invalid size", group_size)
            return BookingResult(False, BookingFailure.INVALID_SIZE, group_size=group_size)
        row = self.suggest_best_row(group_size)
        if row == -1:
            logger.debug("Rejected booking of %d seats: no row fits", group_size)
            return BookingResult(False, BookingFailure.NO_ROW, group_size=group_size)
        start = self.find_block_start_in_row(row, group_size)
        if start == -1:
            return BookingResult(False, BookingFailure.NO_BLOCK, row=row, group_size=group_size)

        written = []
        for c in range(start, start + group_size):
            if self.grid.get(row, c) == SeatState.AVAILABLE:
                self.grid.set(row, c, SeatState.BOOKED)
                written.append((row, c))
        logger.info("Booked %d seats in row %d from column %d", group_size, row, start)
        return BookingResult(True, None, row, start, group_size, written)

    def render_grid(self) -> str:
        lines = ["--- SEATING ---", "     " + "".join(f" {c}" for c in range(self.cols))]
        for r in range(self.rows):
            lines.append(f"Row {r}:" + "".join(f" {s.symbol}" for s in self.grid.row(r)))
        lines.append("Legend: 0=available, 1=booked, 2=broken, 3=VIP")
        return "\n".join(lines)


# ----------------------------- vip-rows -----------------------------
class VipRowEngine(SeatingEngine):
    """Three state auditorium where the front rows can be booked as VIP."""

    profile = VIP_ROWS
    available_state = BookingStatus.AVAILABLE

    def __init__(self, grid: SeatGrid, config: Optional[VipRowConfig] = None) -> None:
        super().__init__(grid)
        self.config = config or VipRowConfig()
        self.vip_row_end = min(self.config.vip_row_end, grid.rows - 1)

    @classmethod
    def create(
        cls,
        rows: int = DEFAULT_VIP_ROWS_SHAPE[0],
        cols: int = DEFAULT_VIP_ROWS_SHAPE[1],
        config: Optional[VipRowConfig] = None,
    ) -> "VipRowEngine":
        grid = SeatGrid(rows, cols, fill=BookingStatus.AVAILABLE)
        engine = cls(grid, config)
        logger.info(
            "Created %s auditorium %dx%d, VIP rows 0..%d",
            VIP_ROWS, rows, cols, engine.vip_row_end,
        )
        return engine

    def available_count(self) -> int:
        return self.grid.count(BookingStatus.AVAILABLE)

    def booked_count(self) -> int:
        return self.grid.count(BookingStatus.REGULAR_BOOKED, BookingStatus.VIP_BOOKED)

    def regular_booked_count(self) -> int:
        return self.grid.count(BookingStatus.REGULAR_BOOKED)

    def broken_count(self) -> int:
        return 0

    def vip_count(self) -> int:
        return self.grid.count(BookingStatus.VIP_BOOKED)

    def occupied_count(self) -> int:
        return self.booked_count()

    def is_vip_row(self, row: int) -> bool:
        return 0 <= row <= self.vip_row_end

    def is_row_usable(self, row: int) -> bool:
        if not 0 <= row < self.rows:
            return False
        return any(s == BookingStatus.AVAILABLE for s in self.grid.row(row))

    def find_contiguous_start_in_row(self, row: int, group_size: int) -> int:
        """Start of the first run of ``group_size`` available seats, or -1."""
        if not self._valid_group(row, group_size):
            return -1
        run = 0
        start = 0
        for c, state in enumerate(self.grid.row(row)):
            if state == BookingStatus.AVAILABLE:
                if run == 0:
                    start = c
                run += 1
                if run >= group_size:
                    return start
            else:
                run = 0
        return -1

    find_block_start_in_row = find_contiguous_start_in_row

    def can_seat_group_in_row(self, row: int, group_size: int) -> bool:
        if not self._valid_group(row, group_size):
            return False
        run = 0
        for state in self.grid.row(row):
            run = run + 1 if state == BookingStatus.AVAILABLE else 0
            if run >= group_size:
                return True
        return False

    def suggest_best_row(self, group_size: int) -> int:
        """Fitting row closest to the middle of the auditorium, lowest index on ties."""
        if not 1 <= group_size <= self.cols:
            return -1
        middle_row = self.rows // 2
        best_row = -1
        best_distance = self.rows + 1
        for r in range(self.rows):
            if not self.can_seat_group_in_row(r, group_size):
                continue
            distance = abs(r - middle_row)
            if distance < best_distance:
                best_distance = distance
                best_row = r
        return best_row

    def book_group_detailed(
        self, row: int, start_col: int, group_size: int, is_vip: bool = False
    ) -> BookingResult:
        """Book ``group_size`` seats from ``start_col``, all or nothing."""
        if not (0 <= row < self.rows and 0 <= start_col < self.cols):
            logger.debug("Rejected booking at (%d, %d): out of range", row, start_col)
            return BookingResult(False, BookingFailure.INVALID_POSITION, row, start_col, group_size)
        if group_size < 1 or start_col + group_size > self.cols:
            logger.debug("Rejected booking of %d seats at (%d, %d): does not fit", group_size, row, start_col)
            return BookingResult(False, BookingFailure.INVALID_SIZE, row, start_col, group_size)
        block = range(start_col, start_col + group_size)
        if any(self.grid.get(row, c) != BookingStatus.AVAILABLE for c in block):
            logger.debug("Rejected booking of %d seats at (%d, %d): seats taken", group_size, row, start_col)
            return BookingResult(False, BookingFailure.SEATS_UNAVAILABLE, row, start_col, group_size)

        status = BookingStatus.VIP_BOOKED if is_vip and self.is_vip_row(row) else BookingStatus.REGULAR_BOOKED
        for c in block:
            self.grid.set(row, c, status)
        logger.info(
            "Booked %d seats in row %d from column %d as %s",
            group_size, row, start_col, status.name,
        )
        return BookingResult(True, None, row, start_col, group_size, [(row, c) for c in block])

    def render_grid(self) -> str:
        lines = [
            "--- SEATING LAYOUT ---",
            "Row  | Seats (R=Regular, V=VIP, _=Available)",
            "-----|----------------------------------------",
        ]
        for r in range(self.rows):
            seats = "".join(f"{s.symbol} " for s in self.grid.row(r))
            label = " (VIP)" if self.is_vip_row(r) else ""
            lines.append(f"  {r}  | {seats}{label}")
        lines.append("-----|----------------------------------------")
        return "\n".join(lines)


# ----------------------------- factory -----------------------------
PROFILES: Dict[str, Type[SeatingEngine]] = {
    RANDOM_FILL: RandomFillEngine,
    VIP_ROWS: VipRowEngine,
}


def create_engine(
    rows: int,
    cols: int,
    profile: str = RANDOM_FILL,
    seed: Optional[int] = None,
    config: Optional[object] = None,
) -> SeatingEngine:
    """Build a fresh auditorium for ``profile``."""
    if profile == RANDOM_FILL:
        return RandomFillEngine.create(rows, cols, seed=seed, config=config)
    if profile == VIP_ROWS:
        return VipRowEngine.create(rows, cols, config=config)
    raise ValueError(f"Unknown profile {profile!r}, expected one of: {', '.join(PROFILES)}")
