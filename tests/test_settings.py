# ABOUTME: Tests for environment-driven configuration.
# ABOUTME: Verifies defaults and overrides read by load_settings.

import pytest
from pydantic import ValidationError

from forecast_screen.models import Coordinate
from forecast_screen.settings import FORECAST_URL, REVERSE_GEOCODE_URL, load_settings

_ENV_VARS = (
    "FORECAST_API_KEY",
    "FORECAST_BASE_URL",
    "REVERSE_GEOCODE_URL",
    "IP_LOCATION_URL",
    "FORECAST_LOCALE",
    "GEOCODE_LANGUAGE",
    "BUSY_DISMISS_DELAY",
    "LOCATION_LATITUDE",
    "LOCATION_LONGITUDE",
    "LOCATION_CONSENT",
    "USER_AGENT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr("forecast_screen.settings.load_dotenv", lambda: None)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = load_settings()
    assert settings.forecast_api_key == ""
    assert settings.forecast_base_url == FORECAST_URL
    assert settings.reverse_geocode_url == REVERSE_GEOCODE_URL
    assert settings.locale == "en_US"
    assert settings.busy_dismiss_delay == 1.0
    assert settings.fixed_location is None
    assert settings.location_consent is False


def test_overrides(monkeypatch):
    monkeypatch.setenv("FORECAST_API_KEY", "secret")
    monkeypatch.setenv("FORECAST_BASE_URL", "https://api.forecast.io/forecast")
    monkeypatch.setenv("BUSY_DISMISS_DELAY", "0")
    monkeypatch.setenv("LOCATION_LATITUDE", "55.6761")
    monkeypatch.setenv("LOCATION_LONGITUDE", "12.5683")
    monkeypatch.setenv("LOCATION_CONSENT", "yes")

    settings = load_settings()

    assert settings.forecast_api_key == "secret"
    assert settings.forecast_base_url == "https://api.forecast.io/forecast"
    assert settings.busy_dismiss_delay == 0.0
    assert settings.fixed_location == Coordinate(latitude=55.6761, longitude=12.5683)
    assert settings.location_consent is True


def test_half_configured_location_is_ignored(monkeypatch):
    monkeypatch.setenv("LOCATION_LATITUDE", "55.6761")
    assert load_settings().fixed_location is None


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("LOCATION_LATITUDE", "north"),
        ("LOCATION_LATITUDE", "91"),
        ("LOCATION_LONGITUDE", "-180.5"),
        ("BUSY_DISMISS_DELAY", "soon"),
        ("BUSY_DISMISS_DELAY", "-1"),
    ],
)
def test_invalid_values_report_validation_error(monkeypatch, name, value):
    """Malformed or out-of-range numbers are reported by Settings validation.

    Implementation: Sets a valid fixed location, then corrupts one numeric variable.
    Passing implies: Bad configuration fails with a ValidationError naming the setting.
    """
    monkeypatch.setenv("LOCATION_LATITUDE", "55.6761")
    monkeypatch.setenv("LOCATION_LONGITUDE", "12.5683")
    monkeypatch.setenv(name, value)

    with pytest.raises(ValidationError):
        load_settings()
