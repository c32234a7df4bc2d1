"""
Runtime settings, built once at startup and passed around explicitly.

Functions
---------
get_gemini_key(settings)
    Gemini API key from the environment, or from Google Secret Manager.
"""
import os
from dataclasses import dataclass
from typing import Mapping

import google.auth
from google.cloud import secretmanager

DEFAULT_APP_ID = "default-app-id"
DEFAULT_MODEL = "gemini-2.5-flash"


@dataclass(frozen=True)
class Settings:
    app_id: str = DEFAULT_APP_ID            # namespace shared by every user of a deployment
    gcp_project: str | None = None          # None -> project from ADC
    gemini_model: str = DEFAULT_MODEL
    gemini_api_key: str | None = None
    gemini_secret: str = "gemini-key"
    request_timeout: float = 30.0
    refresh_seconds: float = 2.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            app_id=env.get("APP_ID") or DEFAULT_APP_ID,
            gcp_project=env.get("GCP_PROJECT") or None,
            gemini_model=env.get("GEMINI_MODEL") or DEFAULT_MODEL,
            gemini_api_key=env.get("GEMINI_API_KEY") or None,
            gemini_secret=env.get("GEMINI_SECRET") or "gemini-key",
            request_timeout=float(env.get("GEMINI_TIMEOUT") or 30),
            refresh_seconds=float(env.get("REFRESH_SECONDS") or 2),
        )


def resolve_project(settings: Settings) -> str:
    if settings.gcp_project:
        return settings.gcp_project
    _, project_id = google.auth.default()
    if not project_id:
        raise RuntimeError("GCP project ID not found")
    return project_id


def get_gemini_key(settings: Settings, client=None) -> str:
    if settings.gemini_api_key:
        return settings.gemini_api_key
    sm = client or secretmanager.SecretManagerServiceClient()
    name = f"projects/{resolve_project(settings)}/secrets/{settings.gemini_secret}/versions/latest"
    return sm.access_secret_version(name=name).payload.data.decode()
