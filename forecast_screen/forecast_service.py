# ABOUTME: Service layer for the Dark Sky compatible forecast API.
# ABOUTME: Builds the keyed request URL, performs one GET, and parses the JSON into a ForecastResponse.

import logging

import httpx
from pydantic import ValidationError

from forecast_screen.models import Coordinate, ForecastResponse
from forecast_screen.settings import FORECAST_URL

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """The forecast could not be retrieved or its payload had the wrong shape."""


def build_forecast_url(coordinate: Coordinate, api_key: str, base_url: str = FORECAST_URL) -> str:
    """The API key and coordinate are path segments: {base}/{key}/{lat},{lon}."""
    return f"{base_url.rstrip('/')}/{api_key}/{coordinate.latitude},{coordinate.longitude}"


async def fetch_forecast(
    client: httpx.AsyncClient,
    coordinate: Coordinate,
    *,
    api_key: str,
    base_url: str = FORECAST_URL,
    timezone_hint: str | None = None,
) -> ForecastResponse:
    """Fetch and parse the forecast for a coordinate.

    Performs exactly one request with the client's default timeout. Any HTTP status
    outside 2xx, transport failure, undecodable body, or missing `currently`/`daily.data`
    raises FetchError with the underlying error chained.
    """
    url = build_forecast_url(coordinate, api_key, base_url)
    try:
        resp = await client.get(url)
        resp.raise_for_status()
        data = resp.json()
    except httpx.HTTPError as e:
        raise FetchError(f"Forecast request failed: {e}") from e
    except ValueError as e:
        raise FetchError(f"Forecast response is not valid JSON: {e}") from e

    forecast = parse_forecast(data, timezone_hint)
    logger.debug("Fetched forecast for %s with %d daily entries", forecast.timezone, len(forecast.daily))
    return forecast


def parse_forecast(data: object, timezone_hint: str | None = None) -> ForecastResponse:
    """Deserialize a forecast payload, defaulting absent scalar fields.

    Only the structure is mandatory: a `currently` object and a `daily` object holding
    a `data` array of objects. A missing timezone falls back to the hint, then UTC.
    """
    if not isinstance(data, dict):
        raise FetchError(f"Forecast payload must be a JSON object, got {type(data).__name__}")

    if timezone_hint and not (isinstance(data.get("timezone"), str) and data["timezone"].strip()):
        data = {**data, "timezone": timezone_hint}

    try:
        return ForecastResponse.model_validate(data)
    except ValidationError as e:
        raise FetchError(f"Forecast payload has an unexpected shape: {e}") from e
