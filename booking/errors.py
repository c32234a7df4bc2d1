"""
Exceptions raised by the booking helpers.

Every error here is recoverable: the Streamlit page catches it and shows
the message inline. ``ValidationError``, ``ConflictError`` and
``TransitionError`` are ``ValueError`` subclasses, ``StoreError`` and
``GenerationError`` are ``RuntimeError`` subclasses.
"""


class BookingError(Exception):
    pass


class ValidationError(BookingError, ValueError):
    """A required field is missing or blank."""


class ConflictError(BookingError, ValueError):
    """The (date, time, room) slot already has a booking."""


class TransitionError(BookingError, ValueError):
    pass


class StoreError(BookingError, RuntimeError):
    """Firestore could not be reached or refused the request."""


class GenerationError(BookingError, RuntimeError):
    """The agenda could not be drafted."""
