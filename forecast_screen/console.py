# ABOUTME: Terminal entry point for the forecast screen.
# ABOUTME: Wires settings, HTTP client, location provider and a text render target, then refreshes once.

import asyncio
import logging
import sys
from typing import TextIO

from forecast_screen.deps import ScreenDeps, create_http_client
from forecast_screen.location import FixedLocationProvider, IPLocationProvider, LocationProvider, LocationResolver
from forecast_screen.models import ViewState
from forecast_screen.presenter import ForecastPresenter
from forecast_screen.settings import Settings, load_settings

logger = logging.getLogger(__name__)


class ConsoleRenderTarget:
    """Writes each ViewState as a plain-text card."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout

    def render(self, state: ViewState) -> None:
        lines = [
            state.title or "-",
            f"{state.place}  {state.date}".strip(),
            f"{state.temperature} {state.icon}".strip(),
            f"Wind {state.wind_speed} {state.wind_direction}  Precip {state.precipitation}",
            "  ".join(f"{cell.day} {cell.icon} {cell.temperature}" for cell in state.days),
            "",
        ]
        self.stream.write("\n".join(lines))
        self.stream.flush()


class LoggingBusyIndicator:
    """Logs the busy status; a delayed dismiss is scheduled on the running event loop."""

    def __init__(self):
        self.visible = False
        self._pending: asyncio.TimerHandle | None = None

    def show(self, status: str) -> None:
        self._cancel_pending()
        self.visible = True
        logger.info(status)

    def dismiss(self, delay: float = 0.0) -> None:
        self._cancel_pending()
        if delay > 0:
            self._pending = asyncio.get_running_loop().call_later(delay, self._hide)
        else:
            self._hide()

    def _hide(self) -> None:
        self._pending = None
        self.visible = False
        logger.debug("Busy indicator dismissed")

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None


def create_location_provider(deps: ScreenDeps) -> LocationProvider:
    settings = deps.settings
    if settings.fixed_location is not None:
        return FixedLocationProvider(settings.fixed_location)
    return IPLocationProvider(deps.http_client, settings.ip_location_url, consent=settings.location_consent)


async def run(settings: Settings, render_target: ConsoleRenderTarget) -> ViewState:
    async with create_http_client(settings) as http_client:
        deps = ScreenDeps(http_client=http_client, settings=settings)
        resolver = LocationResolver(
            create_location_provider(deps),
            http_client,
            reverse_geocode_url=settings.reverse_geocode_url,
            language=settings.geocode_language,
        )
        presenter = ForecastPresenter(deps, resolver, render_target, LoggingBusyIndicator())
        await presenter.start()
        if not resolver.status.is_authorized:
            logger.info("Location permission not granted; set LOCATION_CONSENT=1 or LOCATION_LATITUDE/LONGITUDE")
        return presenter.state


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(run(load_settings(), ConsoleRenderTarget()))


if __name__ == "__main__":
    main()
