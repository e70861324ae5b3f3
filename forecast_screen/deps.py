# ABOUTME: Dependency container for the forecast presenter using Pydantic BaseModel.
# ABOUTME: Holds the shared httpx.AsyncClient and Settings used by every network call.

import httpx
from pydantic import BaseModel, ConfigDict

from forecast_screen.settings import Settings


class ScreenDeps(BaseModel):
    """Dependencies injected into the presenter and location resolver."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    settings: Settings


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the shared httpx client.

    Requests are sent once with httpx's default timeout; nothing is retried.
    The User-Agent header is required by public reverse geocoding services.
    """
    return httpx.AsyncClient(headers={"User-Agent": settings.user_agent})
