# ----- booking/auth.py -----
import logging
import uuid

from .state import AppState

logger = logging.getLogger(__name__)


def sign_in_anonymously(state: AppState) -> AppState:
    """Give the session an opaque user ID once; later calls keep it."""
    if state.user_id is not None:
        return state
    user_id = uuid.uuid4().hex
    logger.info("Anonymous session %s signed in", user_id)
    return state.signed_in(user_id)
