import datetime
from unittest.mock import Mock, patch

import pytest

from booking.config import DEFAULT_APP_ID, DEFAULT_MODEL, Settings, get_gemini_key, resolve_project
from booking.models import utc_timestamp


def test_defaults_from_empty_environment():
    settings = Settings.from_env({})
    assert settings.app_id == DEFAULT_APP_ID
    assert settings.gemini_model == DEFAULT_MODEL
    assert settings.gcp_project is None
    assert settings.gemini_api_key is None
    assert settings.request_timeout == 30.0


def test_values_from_environment():
    settings = Settings.from_env(
        {
            "APP_ID": "mdl-comex",
            "GCP_PROJECT": "rooms-prod",
            "GEMINI_MODEL": "gemini-pro",
            "GEMINI_API_KEY": "k",
            "GEMINI_TIMEOUT": "12.5",
            "REFRESH_SECONDS": "5",
        }
    )
    assert settings.app_id == "mdl-comex"
    assert settings.gcp_project == "rooms-prod"
    assert settings.gemini_model == "gemini-pro"
    assert settings.gemini_api_key == "k"
    assert settings.request_timeout == 12.5
    assert settings.refresh_seconds == 5.0


def test_key_from_settings_skips_secret_manager():
    sm = Mock()
    assert get_gemini_key(Settings(gemini_api_key="k"), client=sm) == "k"
    sm.access_secret_version.assert_not_called()


def test_key_from_secret_manager():
    sm = Mock()
    sm.access_secret_version.return_value.payload.data = b"from-sm"

    key = get_gemini_key(Settings(gcp_project="rooms-prod"), client=sm)

    assert key == "from-sm"
    sm.access_secret_version.assert_called_once_with(
        name="projects/rooms-prod/secrets/gemini-key/versions/latest"
    )


def test_project_falls_back_to_adc():
    with patch("booking.config.google.auth.default", return_value=(Mock(), "adc-project")):
        assert resolve_project(Settings()) == "adc-project"


def test_missing_project_is_an_error():
    with patch("booking.config.google.auth.default", return_value=(Mock(), None)):
        with pytest.raises(RuntimeError):
            resolve_project(Settings())


def test_timestamp_is_utc_with_milliseconds():
    now = datetime.datetime(2024, 6, 1, 9, 0, 0, 123456, tzinfo=datetime.timezone.utc)
    assert utc_timestamp(now) == "2024-06-01T09:00:00.123Z"


def test_empty_numeric_values_fall_back_to_defaults():
    settings = Settings.from_env({"GEMINI_TIMEOUT": "", "REFRESH_SECONDS": ""})
    assert settings.request_timeout == 30.0
    assert settings.refresh_seconds == 2.0
