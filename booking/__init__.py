"""
Package initialiser for the `booking` helper package.

Re-exports the pieces the Streamlit page needs, so it can do:

    from booking import FirestoreBookingStore, reserve_slot, generate_time_slots
"""
from .agenda import draft_agenda
from .config import Settings
from .db import FirestoreBookingStore, get_client
from .errors import ConflictError, GenerationError, StoreError, ValidationError
from .feed import LiveBookings
from .models import Booking
from .reservations import reserve_slot
from .slots import ROOMS, generate_time_slots, is_booked

__all__ = [
    "Booking",
    "ConflictError",
    "FirestoreBookingStore",
    "GenerationError",
    "LiveBookings",
    "ROOMS",
    "Settings",
    "StoreError",
    "ValidationError",
    "draft_agenda",
    "generate_time_slots",
    "get_client",
    "is_booked",
    "reserve_slot",
]
