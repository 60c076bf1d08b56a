"""Streamlit UI for cinema seating with grid previews and group booking."""
from __future__ import annotations

# Add src to sys.path so cinema_seating can be found
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

import streamlit as st

from cinema_seating.config import RANDOM_FILL, VIP_ROWS, DEFAULT_VIP_ROWS_SHAPE
from cinema_seating.engine import SeatingEngine, create_engine
from cinema_seating.layout import grid_frame, row_stats_frame

# -----------------------------
# Helpers
# -----------------------------

def new_engine(profile: str, rows: int, cols: int, seed: int) -> SeatingEngine:
    """Build an auditorium and keep it for the rest of the session."""
    engine = create_engine(rows, cols, profile=profile, seed=seed)
    st.session_state["engine"] = engine
    st.session_state["last_booking"] = None
    return engine

def book_suggested() -> None:
    """Button callback: runs before the page redraws, so the grid shows the booking."""
    engine = st.session_state["engine"]
    st.session_state["last_booking"] = engine.book_group_detailed(int(st.session_state["group_size"]))

def book_chosen() -> None:
    engine = st.session_state["engine"]
    st.session_state["last_booking"] = engine.book_group_detailed(
        int(st.session_state["book_row"]),
        int(st.session_state["book_start"]),
        int(st.session_state["group_size"]),
        bool(st.session_state["book_vip"]),
    )

def booking_message(result) -> str:
    if result.ok:
        seats = ", ".join(f"{c}" for _, c in result.seats) or "none (VIP seats kept)"
        return f"Booked row {result.row}, seats written: {seats}."
    return f"Booking failed: {result.reason.value.replace('_', ' ')}."

# -----------------------------
# Sidebar options
# -----------------------------

st.sidebar.header("Auditorium")
profile = st.sidebar.selectbox(
    "Seat model",
    [RANDOM_FILL, VIP_ROWS],
    help="random-fill seeds booked, broken and VIP seats. vip-rows starts empty with VIP front rows.",
)
default_rows, default_cols = DEFAULT_VIP_ROWS_SHAPE
rows = st.sidebar.number_input("Rows", min_value=1, max_value=30, value=default_rows)
cols = st.sidebar.number_input("Seats per row", min_value=1, max_value=30, value=default_cols)
seed = st.sidebar.number_input("Random seed", min_value=0, value=42,
                               help="Only used by random-fill.")
rebuild = st.sidebar.button("New auditorium", key="new_auditorium_button")

engine = st.session_state.get("engine")
if rebuild or engine is None or engine.profile != profile:
    engine = new_engine(profile, int(rows), int(cols), int(seed))

# -----------------------------
# Main UI
# -----------------------------

st.title("Cinema Seating")

summary = engine.summary()
c1, c2, c3, c4, c5 = st.columns(5)
c1.metric("Available", summary["available"])
c2.metric("Booked", summary["booked"])
c3.metric("Broken", summary["broken"])
c4.metric("VIP", summary["vip"])
c5.metric("Occupancy", f"{summary['occupancy_rate']:.1f}%")

st.subheader("Seating")
st.dataframe(grid_frame(engine), use_container_width=True)
if engine.profile == RANDOM_FILL:
    st.caption("Legend: 0=available, 1=booked, 2=broken, 3=VIP")
else:
    st.caption("Legend: _=available, R=regular, V=VIP")

st.subheader("Rows")
st.dataframe(row_stats_frame(engine), use_container_width=True)

# -----------------------------
# Group seating
# -----------------------------

st.subheader("Group seating")
group_size = int(st.number_input("Group size", min_value=1, max_value=engine.cols, value=1, key="group_size"))
best = engine.suggest_best_row(group_size)
if best == -1:
    st.info(f"No row can seat a group of {group_size}.")
else:
    start = engine.find_block_start_in_row(best, group_size)
    st.info(f"Suggested row: {best} (seats {start}-{start + group_size - 1}).")

if engine.profile == RANDOM_FILL:
    st.button("Book group in suggested row", key="book_auto_button", on_click=book_suggested)
else:
    st.number_input("Row", min_value=0, max_value=engine.rows - 1, value=0, key="book_row")
    st.number_input("Starting seat", min_value=0, max_value=engine.cols - 1, value=0, key="book_start")
    st.checkbox("VIP booking", value=False, key="book_vip")
    st.button("Book group", key="book_manual_button", on_click=book_chosen)

result = st.session_state.get("last_booking")
if result is not None:
    if result.ok:
        st.success(booking_message(result))
    else:
        st.error(booking_message(result))
