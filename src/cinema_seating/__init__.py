"""Cinema seating package."""
from .models import (
    BookingFailure,
    BookingResult,
    BookingStatus,
    RowStats,
    SeatGrid,
    SeatState,
)
from .config import RANDOM_FILL, VIP_ROWS, RandomFillConfig, VipRowConfig
from .engine import (
    PROFILES,
    RandomFillEngine,
    SeatingEngine,
    VipRowEngine,
    create_engine,
)
from .layout import grid_frame, load_layout, row_stats_frame

__all__ = [
    "BookingFailure",
    "BookingResult",
    "BookingStatus",
    "RowStats",
    "SeatGrid",
    "SeatState",
    "RANDOM_FILL",
    "VIP_ROWS",
    "RandomFillConfig",
    "VipRowConfig",
    "PROFILES",
    "RandomFillEngine",
    "SeatingEngine",
    "VipRowEngine",
    "create_engine",
    "grid_frame",
    "load_layout",
    "row_stats_frame",
]
