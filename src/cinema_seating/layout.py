"""CSV seat maps and pandas views of an auditorium."""
from __future__ import annotations

from pathlib import Path
from typing import IO, Any, Dict, List, Optional, Union

import pandas as pd
from pandas.errors import EmptyDataError, ParserError

from .config import RANDOM_FILL, VIP_ROWS, RandomFillConfig, VipRowConfig
from .engine import RandomFillEngine, SeatingEngine, VipRowEngine
from .models import BookingStatus, SeatGrid, SeatState, parse_int


def _codes_for(profile: str) -> Dict[str, Any]:
    """Map every accepted CSV token to its seat state."""
    if profile == RANDOM_FILL:
        return {str(int(s)): s for s in SeatState}
    if profile == VIP_ROWS:
        codes: Dict[str, Any] = {str(int(s)): s for s in BookingStatus}
        codes.update({s.symbol: s for s in BookingStatus})
        return codes
    raise ValueError(f"Unknown profile {profile!r}")


def _parse_token(value: object, codes: Dict[str, Any], row: int, col: int):
    number = parse_int(value)
    token = str(number) if number is not None else str(value).strip().upper()
    if token not in codes:
        raise ValueError(f"Unknown seat code {value!r} at row {row}, column {col}")
    return codes[token]


def load_layout(
    path: Union[Path, str, IO[Any]],
    profile: str = RANDOM_FILL,
    config: Optional[Union[RandomFillConfig, VipRowConfig]] = None,
) -> SeatingEngine:
    """Load a header-less seat map, one line per row and one field per seat.

    Fields hold integer codes (``0``-``3`` for ``random-fill``, ``0``-``2`` for
    ``vip-rows``). ``vip-rows`` maps also accept ``_``, ``R`` and ``V``.
    """
    codes = _codes_for(profile)
    try:
        df = pd.read_csv(path, header=None, dtype=str, skip_blank_lines=True)
    except EmptyDataError as exc:
        raise ValueError("Seat map is empty") from exc
    except ParserError as exc:
        raise ValueError(f"Seat map rows differ in length: {exc}") from exc

    seat_rows: List[list] = []
    for r, (_, row) in enumerate(df.iterrows()):
        values = list(row.values)
        if any(pd.isna(v) for v in values):
            raise ValueError(f"Row {r} of the seat map is shorter than the others")
        seat_rows.append([_parse_token(v, codes, r, c) for c, v in enumerate(values)])

    grid = SeatGrid.from_rows(seat_rows)
    if profile == RANDOM_FILL:
        return RandomFillEngine(grid, config)
    return VipRowEngine(grid, config)


def grid_frame(engine: SeatingEngine) -> pd.DataFrame:
    """Display symbols as a DataFrame indexed ``Row r`` with one column per seat."""
    data = [[s.symbol for s in engine.grid.row(r)] for r in range(engine.rows)]
    return pd.DataFrame(
        data,
        index=[f"Row {r}" for r in range(engine.rows)],
        columns=list(range(engine.cols)),
    )


def row_stats_frame(engine: SeatingEngine) -> pd.DataFrame:
    """Row analysis as a DataFrame, one line per row."""
    columns = ["row", "available", "occupied", "broken", "vip_eligible", "occupancy_rate"]
    stats = engine.analyze_rows()
    return pd.DataFrame([s.__dict__ for s in stats], columns=columns)
