"""The Booking document and its Firestore representation."""
import datetime
from dataclasses import dataclass
from typing import Any, Mapping


def utc_timestamp(now: datetime.datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. ``2024-06-01T09:00:00.000Z``."""
    now = now or datetime.datetime.now(datetime.timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return now.isoformat(timespec="milliseconds") + "Z"


@dataclass(frozen=True)
class Booking:
    """One reserved slot.

    Attributes
    ----------
    id
        Document ID assigned by Firestore.
    user_name
        Free-text name of whoever booked. Only a label.
    date
        ``YYYY-MM-DD``.
    time
        ``HH:MM``, one of the slots from ``generate_time_slots``.
    room
        Room name.
    created_at
        Write timestamp, see ``utc_timestamp``.
    """

    id: str
    user_name: str
    date: str
    time: str
    room: str
    created_at: str

    def to_dict(self) -> dict[str, str]:
        # field names match the documents written by the web client
        return {
            "userName": self.user_name,
            "date": self.date,
            "time": self.time,
            "room": self.room,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, doc_id: str, data: Mapping[str, Any]) -> "Booking":
        return cls(
            id=doc_id,
            user_name=data.get("userName", ""),
            date=data.get("date", ""),
            time=data.get("time", ""),
            room=data.get("room", ""),
            created_at=data.get("createdAt", ""),
        )

    @classmethod
    def from_snapshot(cls, snapshot) -> "Booking":
        return cls.from_dict(snapshot.id, snapshot.to_dict() or {})
