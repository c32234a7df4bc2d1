import itertools

import pytest

from booking.errors import ConflictError
from booking.feed import Subscription
from booking.models import Booking
from booking.slots import is_booked


class InMemoryBookingStore:
    """Stand-in for FirestoreBookingStore; notifies subscribers synchronously."""

    def __init__(self):
        self.bookings: list[Booking] = []
        self.writes = 0
        self._ids = itertools.count(1)
        self._listeners = []

    def exists(self, date, time, room):
        return is_booked(date, time, room, self.bookings)

    def add_if_absent(self, *, user_name, date, time, room, created_at):
        if is_booked(date, time, room, self.bookings):
            raise ConflictError("This slot is already booked. Please choose another one.")
        booking = Booking(
            id=f"doc-{next(self._ids)}",
            user_name=user_name,
            date=date,
            time=time,
            room=room,
            created_at=created_at,
        )
        self.bookings.append(booking)
        self.writes += 1
        self._notify()
        return booking

    def list_bookings(self):
        return list(self.bookings)

    def subscribe(self, callback):
        self._listeners.append(callback)
        callback(list(self.bookings))
        return Subscription(lambda: self._listeners.remove(callback))

    @property
    def listener_count(self):
        return len(self._listeners)

    def _notify(self):
        for listener in list(self._listeners):
            listener(list(self.bookings))


@pytest.fixture()
def store() -> InMemoryBookingStore:
    return InMemoryBookingStore()
