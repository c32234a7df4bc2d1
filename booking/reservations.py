"""
The reservation writer.

reserve_slot(store, user_name, date, time, room)
    Validates the request, re-checks the store for the slot and writes
    one booking. The check and the write are not atomic across clients;
    the Firestore store narrows the gap with a transaction.
"""
import datetime
import logging

from .errors import ConflictError, ValidationError
from .models import Booking, utc_timestamp

logger = logging.getLogger(__name__)


def reserve_slot(
    store,
    user_name: str,
    date: str,
    time: str,
    room: str,
    *,
    now: datetime.datetime | None = None,
) -> Booking:
    """
    Try to book a slot; fail if someone else snapped it first.

    Parameters
    ----------
    store : FirestoreBookingStore
        Or anything with the same ``exists`` / ``add_if_absent`` methods.
    user_name : str
        Name of the person making the booking. Stored as given.
    date : str
        Date in ISO-8601 format ("2025-05-07").
    time : str
        Slot label ("13:30").
    room : str
        Room name.
    now : datetime, optional
        Write time, defaults to the current UTC time.

    Raises
    ------
    ValidationError
        Blank name, or missing date / time / room.
    ConflictError
        The slot is already booked. Nothing is written.
    """
    if not user_name or not user_name.strip():
        raise ValidationError("Please enter your name to book.")
    if not date or not time or not room:
        raise ValidationError("Please select a date, room and time.")

    if store.exists(date, time, room):
        logger.info("Slot %s %s in %r already taken", date, time, room)
        raise ConflictError("This slot is already booked. Please choose another one.")

    booking = store.add_if_absent(
        user_name=user_name,
        date=date,
        time=time,
        room=room,
        created_at=utc_timestamp(now),
    )
    logger.info("Booked %s %s in %r for %r (id=%s)", date, time, room, user_name, booking.id)
    return booking
