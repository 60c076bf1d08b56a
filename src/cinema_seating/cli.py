"""Command line interface for cinema seating."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence, TextIO

from .config import RANDOM_FILL, VIP_ROWS, DEFAULT_VIP_ROWS_SHAPE, VipRowConfig
from .engine import SeatingEngine, create_engine
from .layout import load_layout
from .models import parse_bool, parse_int

logger = logging.getLogger(__name__)

MENU = """
========================================
   CINEMA SEATING - Menu
========================================
1. Print seating
2. Show counts and occupancy
3. Analyze rows
4. Check if a row is usable
5. Check if a row can seat a group
6. Suggest best row
7. Book a group
8. Exit"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cinema seating manager")
    parser.add_argument("--profile", choices=[RANDOM_FILL, VIP_ROWS], default=RANDOM_FILL,
                        help="Seat model: random-fill (broken seats, VIP middle band) "
                             "or vip-rows (empty hall, VIP front rows).")
    parser.add_argument("--rows", type=int, help="Number of rows. Prompted for when missing.")
    parser.add_argument("--cols", type=int, help="Number of seats per row. Prompted for when missing.")
    parser.add_argument("--seed", type=int, help="Seed for the random-fill layout.")
    parser.add_argument("--layout", type=Path,
                        help="Start from a header-less CSV seat map instead of a fresh hall.")
    parser.add_argument("--vip-row-end", type=int, default=1,
                        help="Last VIP row for the vip-rows profile, -1 for none.")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity.")
    return parser


class Console:
    """Prompt and print against a pair of text streams."""

    def __init__(self, stdin: TextIO, stdout: TextIO) -> None:
        self.stdin = stdin
        self.stdout = stdout

    def say(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def ask(self, prompt: str) -> str:
        """Read one trimmed line. Raises ``EOFError`` when input runs out."""
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EOFError
        return line.strip()

    def ask_int(self, prompt: str) -> Optional[int]:
        return parse_int(self.ask(prompt))


def read_positive_int(console: Console, prompt: str, error: str) -> int:
    """Keep asking until a positive integer is typed."""
    while True:
        value = console.ask_int(prompt)
        if value is not None and value > 0:
            return value
        console.say(error)


# ----------------------------- menu handlers -----------------------------
def _print_seating(engine: SeatingEngine, console: Console) -> None:
    console.say()
    console.say(engine.render_grid())
    console.say()


def _show_counts(engine: SeatingEngine, console: Console) -> None:
    console.say("\n--- Counts and occupancy ---")
    console.say(f"Available: {engine.available_count()}")
    console.say(f"Booked: {engine.booked_count()}")
    console.say(f"Broken: {engine.broken_count()}")
    console.say(f"VIP: {engine.vip_count()}")
    console.say(f"Occupancy rate: {engine.occupancy_rate():.1f}%")


def _analyze_rows(engine: SeatingEngine, console: Console) -> None:
    console.say()
    console.say(engine.render_row_analysis())


def _ask_row(engine: SeatingEngine, console: Console) -> Optional[int]:
    row = console.ask_int(f"Enter row index (0-{engine.rows - 1}): ")
    if row is None:
        console.say("Invalid input. Enter a number.")
        return None
    if not 0 <= row < engine.rows:
        console.say(f"Invalid row. Enter 0 to {engine.rows - 1}.")
        return None
    return row


def _ask_group_size(engine: SeatingEngine, console: Console) -> Optional[int]:
    size = console.ask_int(f"Enter group size (1-{engine.cols}): ")
    if size is None:
        console.say("Invalid input. Enter a number.")
        return None
    if not 1 <= size <= engine.cols:
        console.say(f"Invalid group size. Enter 1 to {engine.cols}.")
        return None
    return size


def _check_row_usable(engine: SeatingEngine, console: Console) -> None:
    row = _ask_row(engine, console)
    if row is None:
        return
    usable = engine.is_row_usable(row)
    console.say(f"Row {row} is {'usable' if usable else 'not usable'}.")


def _check_group_fits(engine: SeatingEngine, console: Console) -> None:
    row = _ask_row(engine, console)
    if row is None:
        return
    size = _ask_group_size(engine, console)
    if size is None:
        return
    can = engine.can_seat_group_in_row(row, size)
    console.say(f"Row {row} can {'' if can else 'not '}seat a group of {size}.")


def _suggest_best_row(engine: SeatingEngine, console: Console) -> None:
    size = _ask_group_size(engine, console)
    if size is None:
        return
    best = engine.suggest_best_row(size)
    if best == -1:
        console.say(f"No row can seat a group of {size}.")
    elif engine.profile == RANDOM_FILL:
        console.say(f"Suggested best row: {best} (most available seats).")
    else:
        start = engine.find_block_start_in_row(best, size)
        console.say(f"Suggested row: {best} (seats {start}-{start + size - 1}).")


def _book_group(engine: SeatingEngine, console: Console) -> None:
    if engine.profile == RANDOM_FILL:
        size = _ask_group_size(engine, console)
        if size is None:
            return
        if engine.book_group(size):
            console.say(f"Group of {size} booked. Updated seating:")
            _print_seating(engine, console)
        else:
            console.say(f"Could not book a group of {size}.")
        return

    row = console.ask_int(f"Enter row (0-{engine.rows - 1}): ")
    start = console.ask_int(f"Enter starting seat number (0-{engine.cols - 1}): ")
    size = console.ask_int(f"Enter group size (1-{engine.cols}): ")
    is_vip = parse_bool(console.ask("VIP booking? (y/n): "))
    if row is None or start is None or size is None:
        console.say("Invalid numbers. Booking cancelled.")
        return
    if not (0 <= row < engine.rows and 0 <= start < engine.cols and size >= 1
            and start + size <= engine.cols):
        console.say("Invalid row, seat, or size. Booking cancelled.")
        return
    if engine.book_group(row, start, size, is_vip):
        console.say("Booking successful.")
    else:
        console.say("Booking failed: one or more seats are not available.")


HANDLERS: Dict[int, Callable[[SeatingEngine, Console], None]] = {
    1: _print_seating,
    2: _show_counts,
    3: _analyze_rows,
    4: _check_row_usable,
    5: _check_group_fits,
    6: _suggest_best_row,
    7: _book_group,
}
EXIT_CHOICE = 8


def run_menu(engine: SeatingEngine, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> None:
    """Interactive loop. Every number is parsed here before it reaches the engine."""
    console = Console(stdin, stdout)
    while True:
        console.say(MENU)
        try:
            choice = console.ask_int(f"Choose an option (1-{EXIT_CHOICE}): ")
            if choice == EXIT_CHOICE:
                break
            handler = HANDLERS.get(choice) if choice is not None else None
            if handler is None:
                console.say(f"Invalid option. Please choose 1-{EXIT_CHOICE}.")
                continue
            handler(engine, console)
        except EOFError:
            break
    console.say("Goodbye!")


def _build_engine(args: argparse.Namespace, parser: argparse.ArgumentParser, console: Console) -> SeatingEngine:
    config = VipRowConfig(args.vip_row_end) if args.profile == VIP_ROWS else None
    if args.layout:
        return load_layout(args.layout, args.profile, config)

    rows, cols = args.rows, args.cols
    for name, value in (("--rows", rows), ("--cols", cols)):
        if value is not None and value < 1:
            parser.error(f"{name} must be a positive number")
    if args.profile == VIP_ROWS:
        rows = rows or DEFAULT_VIP_ROWS_SHAPE[0]
        cols = cols or DEFAULT_VIP_ROWS_SHAPE[1]
    else:
        if rows is None:
            rows = read_positive_int(console, "Enter number of rows: ", "Invalid. Enter a positive number.")
        if cols is None:
            cols = read_positive_int(console, "Enter number of columns: ", "Invalid. Enter a positive number.")
    return create_engine(rows, cols, profile=args.profile, seed=args.seed, config=config)


def main(
    argv: Sequence[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Entry point used by ``python -m cinema_seating.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    console = Console(stdin, stdout)
    try:
        engine = _build_engine(args, parser, console)
    except ValueError as exc:
        parser.error(str(exc))
    except EOFError:
        console.say()
        return 1

    logger.info("Starting menu for %r", engine)
    run_menu(engine, stdin, stdout)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
