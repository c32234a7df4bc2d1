"""
Firestore helper layer used by the Streamlit app.

Classes
-------
FirestoreBookingStore(client, app_id)
    The bookings collection of one namespace. Checks slots, creates
    bookings inside a transaction and streams live snapshots.

Functions
---------
get_client(settings)
    Firestore client built with Application Default Credentials (ADC).
    Works both locally and on Cloud Run.
collection_path(app_id)
    Path segments of the bookings collection for a namespace.
"""
import logging
from typing import Callable

from google.cloud import firestore
from google.cloud import exceptions as gexc
from google.cloud.firestore import transactional
from google.cloud.firestore_v1.base_query import FieldFilter

from .config import Settings
from .errors import ConflictError, StoreError
from .feed import Subscription
from .models import Booking

logger = logging.getLogger(__name__)

BOOKINGS_COLLECTION = "mdl_comex_bookings"


def get_client(settings: Settings) -> firestore.Client:
    # project=None lets the client infer it from ADC
    return firestore.Client(project=settings.gcp_project)


def collection_path(app_id: str) -> tuple[str, ...]:
    return ("artifacts", app_id, "public", "data", BOOKINGS_COLLECTION)


def _slot_query(collection, date: str, time: str, room: str):
    return (
        collection.where(filter=FieldFilter("date", "==", date))
        .where(filter=FieldFilter("time", "==", time))
        .where(filter=FieldFilter("room", "==", room))
    )


def _create_if_free(transaction, query, ref, data: dict) -> None:
    """Transaction body: re-read the slot, then create the booking document."""
    for _ in transaction.get(query):
        # someone wrote the slot after our pre-check
        raise ConflictError("This slot is already booked. Please choose another one.")
    transaction.create(ref, data)


class FirestoreBookingStore:
    def __init__(self, client: firestore.Client, app_id: str):
        self._client = client
        self.app_id = app_id
        self._collection = client.collection(*collection_path(app_id))

    def exists(self, date: str, time: str, room: str) -> bool:
        query = _slot_query(self._collection, date, time, room).limit(1)
        try:
            return any(True for _ in query.stream())
        except gexc.GoogleCloudError as err:          # network / perms
            logger.exception("Slot lookup failed")
            raise StoreError(f"Firestore error: {err}") from err

    def add_if_absent(
        self, *, user_name: str, date: str, time: str, room: str, created_at: str
    ) -> Booking:
        """
        Create a booking unless the slot got taken meanwhile.

        The slot query and the create run in one Firestore transaction
        (transactions retry automatically on contention). Raises
        ``ConflictError`` when the slot is taken and ``StoreError`` on
        any Firestore failure.
        """
        ref = self._collection.document()           # auto-generated ID
        booking = Booking(
            id=ref.id,
            user_name=user_name,
            date=date,
            time=time,
            room=room,
            created_at=created_at,
        )
        txn = transactional(_create_if_free)
        try:
            txn(self._client.transaction(), _slot_query(self._collection, date, time, room), ref, booking.to_dict())
        except gexc.GoogleCloudError as err:
            logger.exception("Could not save booking")
            raise StoreError(f"Firestore error: {err}") from err
        return booking

    def list_bookings(self) -> list[Booking]:
        try:
            return [Booking.from_snapshot(doc) for doc in self._collection.stream()]
        except gexc.GoogleCloudError as err:
            raise StoreError(f"Firestore error: {err}") from err

    def subscribe(self, callback: Callable[[list[Booking]], None]) -> Subscription:
        """
        Call ``callback`` with every booking in the namespace, on the
        initial load and after each change. Always the complete set.
        """
        def _on_snapshot(docs, changes, read_time):
            callback([Booking.from_snapshot(doc) for doc in docs])

        watch = self._collection.on_snapshot(_on_snapshot)
        return Subscription(watch.unsubscribe)
