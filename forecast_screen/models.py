# ABOUTME: Pydantic BaseModels for forecast API responses, places, and render state.
# ABOUTME: Applies permissive coercion so partial API payloads still produce typed records.

import math
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator


def _lenient_int(value: Any) -> int:
    """Coerce a JSON value to int, truncating fractions and mapping junk to 0."""
    return int(_lenient_float(value))


def _lenient_float(value: Any) -> float:
    """Coerce a JSON value to a finite float, mapping junk to 0.0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _lenient_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


# 0001-01-02 and 9999-12-30 UTC; the day of margin keeps timezone conversion inside datetime's range.
_MIN_EPOCH = -62135510400
_MAX_EPOCH = 253402128000


def _epoch_seconds(value: Any) -> int:
    """Coerce a UTC epoch timestamp, rejecting values no calendar date can represent."""
    seconds = _lenient_int(value)
    if not _MIN_EPOCH <= seconds <= _MAX_EPOCH:
        raise ValueError(f"timestamp {seconds} is outside the supported date range")
    return seconds


LenientInt = Annotated[int, BeforeValidator(_lenient_int)]
LenientFloat = Annotated[float, BeforeValidator(_lenient_float)]
LenientStr = Annotated[str, BeforeValidator(_lenient_str)]
EpochSeconds = Annotated[int, BeforeValidator(_epoch_seconds)]


class Coordinate(BaseModel):
    """A latitude/longitude pair reported by a location provider."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class PlaceName(BaseModel):
    """Reverse-geocoded place shown in the screen header."""

    city: str
    region: str
    label: str

    @property
    def title(self) -> str:
        return f"{self.city}, {self.region}"


class CurrentConditions(BaseModel):
    """The `currently` block of a forecast response."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    time: EpochSeconds = 0
    temperature: LenientInt = 0
    icon: LenientStr = ""
    wind_speed: LenientInt = Field(default=0, alias="windSpeed")
    wind_bearing: LenientInt = Field(default=0, alias="windBearing")
    precip_probability: LenientFloat = Field(default=0.0, alias="precipProbability")


class DailyForecastEntry(BaseModel):
    """One row of `daily.data`."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    time: EpochSeconds = 0
    icon: LenientStr = ""
    temperature_max: LenientInt = Field(default=0, alias="temperatureMax")


class ForecastResponse(BaseModel):
    """Parsed forecast: timezone, current conditions, and the daily outlook."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    timezone: str = "UTC"
    current: CurrentConditions = Field(alias="currently")
    daily: list[DailyForecastEntry] = Field(alias="daily")

    @field_validator("timezone", mode="before")
    @classmethod
    def _default_timezone(cls, value: Any) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return "UTC"

    @field_validator("daily", mode="before")
    @classmethod
    def _unwrap_daily_data(cls, value: Any) -> Any:
        # The API nests the rows under daily.data; a bare list is not a valid shape.
        if not isinstance(value, dict):
            raise ValueError("daily must be an object with a data array")
        return value.get("data")


class DayCell(BaseModel):
    """Formatted strings for one cell of the horizontally scrolled daily list."""

    model_config = ConfigDict(frozen=True)

    day: str
    icon: str
    temperature: str


class ViewState(BaseModel):
    """Render-ready snapshot pushed to the display surface."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    place: str = ""
    date: str = ""
    temperature: str = ""
    icon: str = ""
    wind_speed: str = ""
    wind_direction: str = ""
    precipitation: str = ""
    daily: list[DailyForecastEntry] = []
    days: list[DayCell] = []
