"""
Meeting-agenda drafting through the Gemini ``generateContent`` REST API.

Only a convenience: a failure here never affects bookings. Rate-limited
calls (HTTP 429) are retried twice with a 1 s then 2 s wait; any other
error fails straight away with ``GenerationError``.
"""
import logging
import time

import requests
from google.api_core.exceptions import GoogleAPICallError
from google.auth.exceptions import DefaultCredentialsError
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config import DEFAULT_MODEL, Settings, get_gemini_key
from .errors import GenerationError, ValidationError

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
MAX_ATTEMPTS = 3
INITIAL_BACKOFF = 1  # seconds, doubled after each rate-limited attempt

PROMPT_TEMPLATE = (
    "Generate a professional and friendly agenda for a meeting.\n"
    'The meeting will be held in "{room}" on {date}.\n'
    "The organizer is {organizer}. Include 3 to 5 key points for the meeting agenda.\n"
    "Do not add a title to the agenda. Only the points."
)


class RateLimited(Exception):
    """HTTP 429 from the generation API."""


def build_prompt(room: str, date: str, organizer: str) -> str:
    return PROMPT_TEMPLATE.format(room=room, date=date, organizer=organizer)


def build_payload(prompt: str) -> dict:
    return {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}


def extract_text(result) -> str:
    """``candidates[0].content.parts[0].text`` or ``GenerationError``."""
    try:
        text = result["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise GenerationError("Could not generate the agenda: empty response") from None
    if not isinstance(text, str) or not text.strip():
        raise GenerationError("Could not generate the agenda: empty response")
    return text


class AgendaClient:
    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: float = 30.0,
        session: requests.Session | None = None,
        sleep=time.sleep,
    ):
        self._api_key = api_key
        self._url = GEMINI_URL.format(model=model)
        self._timeout = timeout
        self._session = session or requests.Session()
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "AgendaClient":
        try:
            api_key = get_gemini_key(settings)
        except (GoogleAPICallError, DefaultCredentialsError, RuntimeError) as err:
            logger.exception("Could not load the Gemini API key")
            raise GenerationError("Agenda generation is not configured.") from err
        return cls(
            api_key,
            model=settings.gemini_model,
            timeout=settings.request_timeout,
            **kwargs,
        )

    def _post(self, payload: dict) -> dict:
        try:
            response = self._session.post(
                self._url,
                params={"key": self._api_key},
                json=payload,
                timeout=self._timeout,
            )
        except requests.RequestException as err:
            logger.error("Error calling the Gemini API: %s", err)
            raise GenerationError("Error generating the agenda. Please try again.") from err

        if response.status_code == 429:
            raise RateLimited(f"HTTP error! status: {response.status_code}")
        if not response.ok:
            logger.error("Gemini API returned HTTP %s", response.status_code)
            raise GenerationError(f"Error generating the agenda (HTTP {response.status_code}).")
        try:
            return response.json()
        except ValueError as err:
            raise GenerationError("Could not generate the agenda: invalid response") from err

    def draft(self, room: str, date: str, organizer: str) -> str:
        if not organizer or not organizer.strip() or not date or not room:
            raise ValidationError("Please fill in your name, date and room to generate an agenda.")

        payload = build_payload(build_prompt(room, date, organizer))
        retrying = Retrying(
            stop=stop_after_attempt(MAX_ATTEMPTS),
            wait=wait_exponential(multiplier=INITIAL_BACKOFF, exp_base=2),
            retry=retry_if_exception_type(RateLimited),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self._sleep,
            reraise=True,
        )
        try:
            result = retrying(self._post, payload)
        except RateLimited as err:
            logger.error("Gemini API still rate limited after %d attempts", MAX_ATTEMPTS)
            raise GenerationError("The agenda service is busy. Please try again later.") from err
        return extract_text(result)


def draft_agenda(
    room: str,
    date: str,
    organizer: str,
    *,
    settings: Settings,
    session: requests.Session | None = None,
    sleep=time.sleep,
) -> str:
    client = AgendaClient.from_settings(settings, session=session, sleep=sleep)
    return client.draft(room, date, organizer)
