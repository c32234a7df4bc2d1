"""Which screen is showing and who is signed in."""
from dataclasses import dataclass, replace
from enum import Enum

from .errors import TransitionError


class Screen(str, Enum):
    HOME = "home"
    BOOKING = "booking"


@dataclass(frozen=True)
class AppState:
    """
    Immutable per-session state. Transitions return a new instance:
    ``HOME -> BOOKING`` through ``open_booking`` and back through ``go_home``.
    """

    screen: Screen = Screen.HOME
    user_id: str | None = None

    def signed_in(self, user_id: str) -> "AppState":
        return replace(self, user_id=user_id)

    def open_booking(self) -> "AppState":
        if self.screen is not Screen.HOME:
            raise TransitionError(f"Cannot open the booking screen from {self.screen.value!r}")
        if self.user_id is None:
            raise TransitionError("Sign in before booking")
        return replace(self, screen=Screen.BOOKING)

    def go_home(self) -> "AppState":
        return replace(self, screen=Screen.HOME)
