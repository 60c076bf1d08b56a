"""Tunable settings for the seating profiles."""
from __future__ import annotations

from dataclasses import dataclass

RANDOM_FILL = "random-fill"
VIP_ROWS = "vip-rows"

# Default auditorium for the vip-rows profile
DEFAULT_VIP_ROWS_SHAPE = (5, 8)


@dataclass(frozen=True)
class RandomFillConfig:
    """Percentage thresholds used to seed a random auditorium.

    A roll in ``[0, available_below)`` is available, ``[available_below,
    booked_below)`` booked, ``[booked_below, broken_below)`` broken and the
    rest VIP. VIP seats only land in the ``vip_band`` middle rows.
    """

    available_below: int = 65
    booked_below: int = 90
    broken_below: int = 95
    vip_band: int = 4

    def __post_init__(self) -> None:
        if not 0 <= self.available_below <= self.booked_below <= self.broken_below <= 100:
            raise ValueError(
                "Thresholds must satisfy 0 <= available <= booked <= broken <= 100, got "
                f"{self.available_below}, {self.booked_below}, {self.broken_below}"
            )
        if self.vip_band < 0:
            raise ValueError(f"vip_band must not be negative: {self.vip_band}")


@dataclass(frozen=True)
class VipRowConfig:
    """Rows ``0..vip_row_end`` accept VIP bookings. ``-1`` disables VIP rows."""

    vip_row_end: int = 1

    def __post_init__(self) -> None:
        if self.vip_row_end < -1:
            raise ValueError(f"vip_row_end must be -1 or greater: {self.vip_row_end}")
