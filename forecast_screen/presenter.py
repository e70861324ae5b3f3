# ABOUTME: Orchestrates a refresh: location, then place name and forecast in parallel, then render.
# ABOUTME: Owns the ViewState and derives it from each successfully parsed ForecastResponse.

import asyncio
import logging
from typing import Protocol

from forecast_screen.deps import ScreenDeps
from forecast_screen.formatting import (
    DAY_CELL_PATTERN,
    DEFAULT_LOCALE,
    HEADER_DATE_PATTERN,
    format_date,
    format_precipitation,
    format_temperature,
    format_wind_direction,
    format_wind_speed,
)
from forecast_screen.forecast_service import FetchError, fetch_forecast
from forecast_screen.location import AuthorizationStatus, LocationResolver
from forecast_screen.models import Coordinate, DayCell, ForecastResponse, ViewState

logger = logging.getLogger(__name__)

LOADING_STATUS = "Loading..."


class RenderTarget(Protocol):
    """Display surface. Each call is a full redraw, including the daily list."""

    def render(self, state: ViewState) -> None: ...


class BusyIndicator(Protocol):
    def show(self, status: str) -> None: ...

    def dismiss(self, delay: float = 0.0) -> None: ...


def build_view_state(
    forecast: ForecastResponse, previous: ViewState | None = None, locale: str = DEFAULT_LOCALE
) -> ViewState:
    """Derive the render state for a forecast, keeping the place name from `previous`."""
    previous = previous or ViewState()
    current = forecast.current
    return previous.model_copy(
        update={
            "date": format_date(current.time, forecast.timezone, HEADER_DATE_PATTERN, locale),
            "temperature": format_temperature(current.temperature),
            "icon": current.icon,
            "wind_speed": format_wind_speed(current.wind_speed),
            "wind_direction": format_wind_direction(current.wind_bearing),
            "precipitation": format_precipitation(current.precip_probability),
            "daily": list(forecast.daily),
            "days": [
                DayCell(
                    day=format_date(day.time, forecast.timezone, DAY_CELL_PATTERN, locale),
                    icon=day.icon,
                    temperature=format_temperature(day.temperature_max),
                )
                for day in forecast.daily
            ],
        }
    )


class ForecastPresenter:
    """Single-screen controller.

    `refresh` never raises for location, geocoding or forecast failures; each of them
    leaves the last good ViewState on screen. Refreshes are not cancelled, but results
    from a refresh that has since been superseded by a newer one are discarded.
    """

    def __init__(
        self,
        deps: ScreenDeps,
        resolver: LocationResolver,
        render_target: RenderTarget,
        busy_indicator: BusyIndicator,
    ):
        self.deps = deps
        self.resolver = resolver
        self.render_target = render_target
        self.busy_indicator = busy_indicator
        self._state = ViewState()
        self._generation = 0

    @property
    def state(self) -> ViewState:
        return self._state

    async def start(self) -> None:
        """Ask for location permission and refresh if it is granted."""
        await self.authorization_changed(self.resolver.setup())

    async def authorization_changed(self, status: AuthorizationStatus) -> None:
        if self.resolver.authorization_changed(status):
            await self.refresh()

    async def refresh(self) -> ViewState:
        self._generation += 1
        generation = self._generation

        self.busy_indicator.show(LOADING_STATUS)
        coordinate = await self.resolver.request_location()
        if coordinate is None:
            self.busy_indicator.dismiss()
            return self._state

        self.busy_indicator.dismiss(delay=self.deps.settings.busy_dismiss_delay)
        await asyncio.gather(
            self._update_place(coordinate, generation),
            self._update_forecast(coordinate, generation),
        )
        return self._state

    async def _update_place(self, coordinate: Coordinate, generation: int) -> None:
        place = await self.resolver.reverse_geocode(coordinate)
        if place is None or self._is_stale(generation):
            return
        self._publish(self._state.model_copy(update={"title": place.title, "place": place.label}))

    async def _update_forecast(self, coordinate: Coordinate, generation: int) -> None:
        settings = self.deps.settings
        try:
            forecast = await fetch_forecast(
                self.deps.http_client,
                coordinate,
                api_key=settings.forecast_api_key,
                base_url=settings.forecast_base_url,
            )
        except FetchError as e:
            logger.warning("Keeping previous forecast: %s", e)
            return
        if self._is_stale(generation):
            return
        self._publish(build_view_state(forecast, self._state, settings.locale))

    def _is_stale(self, generation: int) -> bool:
        if generation != self._generation:
            logger.debug("Discarding result of superseded refresh %d (current %d)", generation, self._generation)
            return True
        return False

    def _publish(self, state: ViewState) -> None:
        self._state = state
        self.render_target.render(state)
