"""
main.py  –  Streamlit meeting-room booking app
────────────────────────────────────────────────
Two screens: a landing page with a single "Book here" button, and the
booking page (date, room, name, slot grid, agenda drafting, live table of
every booking in the namespace).

Run with:
    streamlit run main.py
"""

import atexit
import logging
import os

import streamlit as st

from booking import (
    ROOMS,
    FirestoreBookingStore,
    GenerationError,
    LiveBookings,
    Settings,
    StoreError,
    generate_time_slots,
    get_client,
    reserve_slot,
)
from booking.agenda import AgendaClient
from booking.auth import sign_in_anonymously
from booking.state import AppState, Screen

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("booking.app")

st.set_page_config(page_title="Meeting Room MDL COMEX", layout="centered")

TITLE = "Meeting Room MDL COMEX"
TIME_SLOTS = generate_time_slots()
GRID_COLUMNS = 6


# ───────────────────────────────────────────────────────────────
# 1.  Settings and shared clients (one per server process)
# ───────────────────────────────────────────────────────────────
SETTINGS = Settings.from_env()


@st.cache_resource
def get_store() -> FirestoreBookingStore:
    return FirestoreBookingStore(get_client(SETTINGS), SETTINGS.app_id)


@st.cache_resource
def get_agenda_client() -> AgendaClient:
    return AgendaClient.from_settings(SETTINGS)


@st.cache_resource
def get_live_bookings() -> LiveBookings:
    # one Firestore listener per server process, shared by every session
    live = LiveBookings(get_store())
    atexit.register(live.close)
    return live


# ───────────────────────────────────────────────────────────────
# 2.  Session state + anonymous sign-in
# ───────────────────────────────────────────────────────────────
if "app" not in st.session_state:
    st.session_state.app = AppState()
st.session_state.app = sign_in_anonymously(st.session_state.app)


def _open_booking():
    st.session_state.app = st.session_state.app.open_booking()


def _go_home():
    for key in ("flash", "agenda"):
        st.session_state.pop(key, None)
    st.session_state.app = st.session_state.app.go_home()


def _book(slot: str):
    st.session_state.pop("agenda", None)
    try:
        reserve_slot(
            get_store(),
            st.session_state.user_name,
            st.session_state.booking_date.isoformat(),
            slot,
            st.session_state.room,
        )
    except ValueError as e:          # ValidationError / ConflictError
        st.session_state.flash = ("error", str(e))
        return
    except StoreError:
        st.session_state.flash = ("error", "Could not save the booking. Please try again.")
        return
    st.session_state.flash = ("success", "Booking saved!")
    st.session_state.user_name = ""


# ───────────────────────────────────────────────────────────────
# 3.  Screens
# ───────────────────────────────────────────────────────────────
def render_home():
    st.title(TITLE)
    st.button("Book here", type="primary", on_click=_open_booking)


@st.fragment(run_every=SETTINGS.refresh_seconds)
def render_live_section():
    if st.session_state.app.screen is not Screen.BOOKING:
        return
    live = get_live_bookings()

    if flash := st.session_state.get("flash"):
        kind, message = flash
        (st.error if kind == "error" else st.success)(message)

    date_iso = st.session_state.booking_date.isoformat()
    room = st.session_state.room

    st.subheader("Booking slots")
    cols = st.columns(GRID_COLUMNS)
    for i, slot in enumerate(TIME_SLOTS):
        booked = live.is_booked(date_iso, slot, room)
        cols[i % GRID_COLUMNS].button(
            slot,
            key=f"slot-{slot}",
            disabled=booked,
            type="secondary" if booked else "primary",
            on_click=_book,
            args=(slot,),
            use_container_width=True,
        )

    st.subheader("Existing bookings")
    if not live.loaded:
        st.info("Loading bookings…")
    else:
        st.dataframe(
            [
                {"User": b.user_name, "Date": b.date, "Time": b.time, "Room": b.room}
                for b in live.bookings
            ],
            hide_index=True,
            use_container_width=True,
        )
    st.caption(f"Your user ID: {st.session_state.app.user_id}")


def render_agenda_section():
    st.subheader("Generate a meeting agenda ✨")
    if st.button("Generate agenda ✨"):
        with st.spinner("Generating…"):
            try:
                st.session_state.agenda = get_agenda_client().draft(
                    st.session_state.room,
                    st.session_state.booking_date.isoformat(),
                    st.session_state.user_name,
                )
            except (ValueError, GenerationError) as e:
                st.session_state.pop("agenda", None)
                st.error(str(e))
    if agenda := st.session_state.get("agenda"):
        st.markdown("**Meeting agenda:**")
        st.write(agenda)


def render_booking():
    st.button("← Back", on_click=_go_home)
    st.title(TITLE)

    date_col, room_col, name_col = st.columns(3)
    date_col.date_input("Date", key="booking_date")
    room_col.selectbox("Room", ROOMS, key="room")
    name_col.text_input("Your name", key="user_name", placeholder="Enter your name")

    render_live_section()
    st.divider()
    render_agenda_section()


if st.session_state.app.screen is Screen.HOME:
    render_home()
else:
    render_booking()
