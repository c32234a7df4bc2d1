"""Slot grid and the client-side conflict check."""
import datetime
from typing import Any, Iterable, Mapping

ROOMS = ("Sala de Reunião 2º andar", "Sala de Reunião 8º andar")

FIRST_SLOT = datetime.time(8, 0)
LAST_SLOT = datetime.time(18, 0)
SLOT_MINUTES = 30


def generate_time_slots() -> list[str]:
    """Bookable ``HH:MM`` labels, 08:00 to 18:00 inclusive, every 30 minutes."""
    day = datetime.date.min
    current = datetime.datetime.combine(day, FIRST_SLOT)
    last = datetime.datetime.combine(day, LAST_SLOT)
    step = datetime.timedelta(minutes=SLOT_MINUTES)

    slots = []
    while current <= last:
        slots.append(current.strftime("%H:%M"))
        current += step
    return slots


def _slot_key(booking: Any) -> tuple:
    if isinstance(booking, Mapping):
        return booking.get("date"), booking.get("time"), booking.get("room")
    return booking.date, booking.time, booking.room


def is_booked(date: str, time: str, room: str, known_bookings: Iterable) -> bool:
    """
    True if ``known_bookings`` already holds this exact (date, time, room).

    Values are compared as-is (case-sensitive, no trimming). Entries can be
    ``Booking`` objects or raw Firestore dicts.
    """
    wanted = (date, time, room)
    return any(_slot_key(b) == wanted for b in known_bookings)
