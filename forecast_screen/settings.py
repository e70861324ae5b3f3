# ABOUTME: Runtime configuration for the forecast screen, read from the environment.
# ABOUTME: Loads an optional .env file; every setting falls back to a fixed default.

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from forecast_screen.models import Coordinate

FORECAST_URL = "https://api.pirateweather.net/forecast"
REVERSE_GEOCODE_URL = "https://nominatim.openstreetmap.org/reverse"
IP_LOCATION_URL = "http://ip-api.com/json/"

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Endpoints, keys, and display preferences."""

    forecast_api_key: str = ""
    forecast_base_url: str = FORECAST_URL
    reverse_geocode_url: str = REVERSE_GEOCODE_URL
    ip_location_url: str = IP_LOCATION_URL
    locale: str = "en_US"
    geocode_language: str = "en"
    busy_dismiss_delay: float = Field(default=1.0, ge=0)
    fixed_location: Coordinate | None = None
    location_consent: bool = False
    user_agent: str = "forecast-screen/0.1"


def load_settings() -> Settings:
    """Build Settings from environment variables, after loading .env if present.

    Values are passed through as strings so that pydantic reports malformed or
    out-of-range numbers as a ValidationError naming the offending setting.
    """
    load_dotenv()

    fixed_location = None
    latitude = os.environ.get("LOCATION_LATITUDE")
    longitude = os.environ.get("LOCATION_LONGITUDE")
    if latitude and longitude:
        fixed_location = {"latitude": latitude, "longitude": longitude}

    return Settings.model_validate(
        {
            "forecast_api_key": os.environ.get("FORECAST_API_KEY", ""),
            "forecast_base_url": os.environ.get("FORECAST_BASE_URL", FORECAST_URL),
            "reverse_geocode_url": os.environ.get("REVERSE_GEOCODE_URL", REVERSE_GEOCODE_URL),
            "ip_location_url": os.environ.get("IP_LOCATION_URL", IP_LOCATION_URL),
            "locale": os.environ.get("FORECAST_LOCALE", "en_US"),
            "geocode_language": os.environ.get("GEOCODE_LANGUAGE", "en"),
            "busy_dismiss_delay": os.environ.get("BUSY_DISMISS_DELAY", "1.0"),
            "fixed_location": fixed_location,
            "location_consent": os.environ.get("LOCATION_CONSENT", "").strip().lower() in _TRUTHY,
            "user_agent": os.environ.get("USER_AGENT", "forecast-screen/0.1"),
        }
    )
