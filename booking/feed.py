"""
Live view of the bookings collection.

``Subscription`` is the handle returned by ``FirestoreBookingStore.subscribe``;
``LiveBookings`` keeps the latest complete snapshot for the Streamlit page.
Firestore delivers snapshots on its own listener thread, so the snapshot is
kept behind a lock.
"""
import logging
import threading
from typing import Callable

from .models import Booking
from .slots import is_booked

logger = logging.getLogger(__name__)


class Subscription:
    """Cancellable listener handle. ``cancel`` is idempotent."""

    def __init__(self, unsubscribe: Callable[[], None]):
        self._unsubscribe = unsubscribe
        self._lock = threading.Lock()
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        with self._lock:
            if not self._active:
                return
            self._active = False
        self._unsubscribe()
        logger.debug("Booking listener released")

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc) -> None:
        self.cancel()


class LiveBookings:
    """
    Latest complete set of bookings in a namespace.

    Parameters
    ----------
    store
        Anything with ``subscribe(callback) -> Subscription`` where the
        callback receives the full list of bookings on every change.
    """

    def __init__(self, store):
        self._lock = threading.Lock()
        self._bookings: list[Booking] = []
        self._loaded = False
        self._subscription = store.subscribe(self._on_change)

    def _on_change(self, bookings: list[Booking]) -> None:
        with self._lock:
            self._bookings = list(bookings)
            self._loaded = True
        logger.debug("Received %d bookings", len(bookings))

    @property
    def bookings(self) -> list[Booking]:
        with self._lock:
            return list(self._bookings)

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def closed(self) -> bool:
        return not self._subscription.active

    def is_booked(self, date: str, time: str, room: str) -> bool:
        return is_booked(date, time, room, self.bookings)

    def close(self) -> None:
        self._subscription.cancel()
