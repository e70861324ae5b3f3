# ABOUTME: Shared test fixtures for the forecast screen test suite.
# ABOUTME: Provides canned forecast/geocoding payloads and coordinates.

import pytest

from forecast_screen.models import Coordinate

# 2016-06-20T23:00:00Z, a Monday evening in New York
MONDAY_EVENING_UTC = 1466463600
# 2016-06-21T16:00:00Z
TUESDAY_NOON_UTC = 1466524800


@pytest.fixture
def coordinate() -> Coordinate:
    return Coordinate(latitude=40.7128, longitude=-74.006)


@pytest.fixture
def forecast_payload() -> dict:
    return {
        "latitude": 40.7128,
        "longitude": -74.006,
        "timezone": "America/New_York",
        "offset": -4,
        "currently": {
            "time": MONDAY_EVENING_UTC,
            "summary": "Clear",
            "icon": "clear-day",
            "temperature": 72,
            "windSpeed": 5,
            "windBearing": 10,
            "precipProbability": 0.2,
        },
        "daily": {
            "summary": "No precipitation throughout the week.",
            "data": [
                {"time": MONDAY_EVENING_UTC, "icon": "clear-day", "temperatureMax": 81.4},
                {"time": TUESDAY_NOON_UTC, "icon": "rain", "temperatureMax": 68},
            ],
        },
    }


@pytest.fixture
def place_payload() -> dict:
    return {
        "name": "City Hall",
        "display_name": "City Hall, Manhattan, New York, United States",
        "address": {"city": "New York", "state": "New York", "country": "United States"},
    }
