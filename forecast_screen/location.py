# ABOUTME: Location permission handling, one-shot location fetches, and reverse geocoding.
# ABOUTME: Providers supply coordinates; LocationResolver reacts to permission changes and names places.

import logging
from enum import Enum
from typing import Protocol

import httpx

from forecast_screen.models import Coordinate, PlaceName
from forecast_screen.settings import IP_LOCATION_URL, REVERSE_GEOCODE_URL

logger = logging.getLogger(__name__)

_CITY_KEYS = ("city", "town", "village", "hamlet", "municipality")
_REGION_KEYS = ("state", "region", "county")


class AuthorizationStatus(str, Enum):
    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"
    AUTHORIZED_ALWAYS = "authorized_always"

    @property
    def is_authorized(self) -> bool:
        return self in (AuthorizationStatus.AUTHORIZED_WHEN_IN_USE, AuthorizationStatus.AUTHORIZED_ALWAYS)


class LocationUnavailable(Exception):
    """The provider is authorized but could not produce a coordinate."""


class LocationProvider(Protocol):
    """Source of the device's position.

    `current_location` delivers a single update and stops; providers never track continuously.
    """

    @property
    def authorization_status(self) -> AuthorizationStatus: ...

    def request_when_in_use_authorization(self) -> AuthorizationStatus: ...

    async def current_location(self) -> Coordinate: ...


class FixedLocationProvider:
    """Always-authorized provider reporting a configured coordinate."""

    def __init__(self, coordinate: Coordinate):
        self.coordinate = coordinate

    @property
    def authorization_status(self) -> AuthorizationStatus:
        return AuthorizationStatus.AUTHORIZED_ALWAYS

    def request_when_in_use_authorization(self) -> AuthorizationStatus:
        return AuthorizationStatus.AUTHORIZED_ALWAYS

    async def current_location(self) -> Coordinate:
        return self.coordinate


class IPLocationProvider:
    """Approximate the position from the public IP address (ip-api.com JSON format).

    Authorization is only granted when the user has consented to the lookup.
    """

    def __init__(self, client: httpx.AsyncClient, url: str = IP_LOCATION_URL, consent: bool = False):
        self.client = client
        self.url = url
        self.consent = consent
        self._status = AuthorizationStatus.NOT_DETERMINED

    @property
    def authorization_status(self) -> AuthorizationStatus:
        return self._status

    def request_when_in_use_authorization(self) -> AuthorizationStatus:
        if self._status is AuthorizationStatus.NOT_DETERMINED:
            self._status = (
                AuthorizationStatus.AUTHORIZED_WHEN_IN_USE if self.consent else AuthorizationStatus.DENIED
            )
        return self._status

    async def current_location(self) -> Coordinate:
        try:
            resp = await self.client.get(self.url)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            raise LocationUnavailable(f"IP geolocation failed: {e}") from e

        if not isinstance(data, dict) or data.get("status") != "success":
            raise LocationUnavailable(f"IP geolocation returned no position: {data!r}")
        try:
            return Coordinate(latitude=float(data["lat"]), longitude=float(data["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            raise LocationUnavailable(f"IP geolocation returned a malformed position: {e}") from e


class LocationResolver:
    """Turns permission changes into one-shot location fetches and coordinates into place names.

    The resolver asks for when-in-use permission once and otherwise only reacts to the
    statuses it is told about; it never drives the permission prompt itself.
    """

    def __init__(
        self,
        provider: LocationProvider,
        client: httpx.AsyncClient,
        *,
        reverse_geocode_url: str = REVERSE_GEOCODE_URL,
        language: str = "en",
    ):
        self.provider = provider
        self.client = client
        self.reverse_geocode_url = reverse_geocode_url
        self.language = language
        self._status = AuthorizationStatus.NOT_DETERMINED

    @property
    def status(self) -> AuthorizationStatus:
        return self._status

    def setup(self) -> AuthorizationStatus:
        """Request when-in-use permission and return the status the provider reports."""
        return self.provider.request_when_in_use_authorization()

    def authorization_changed(self, status: AuthorizationStatus) -> bool:
        """Record a permission transition.

        Returns True when the transition enters an authorized state from a
        non-authorized one, which is when a location fetch should begin.
        """
        previous = self._status
        self._status = status
        logger.debug("Location authorization %s -> %s", previous.value, status.value)
        return status.is_authorized and not previous.is_authorized

    async def request_location(self) -> Coordinate | None:
        """Fetch one coordinate, or None when not authorized or the provider has no fix."""
        if not self._status.is_authorized:
            logger.debug("Location requested without permission (%s)", self._status.value)
            return None
        try:
            return await self.provider.current_location()
        except LocationUnavailable as e:
            logger.debug("Location unavailable: %s", e)
            return None

    async def reverse_geocode(self, coordinate: Coordinate) -> PlaceName | None:
        """Look up a place name for a coordinate; None on any failure or empty result."""
        try:
            resp = await self.client.get(
                self.reverse_geocode_url,
                params={
                    "lat": coordinate.latitude,
                    "lon": coordinate.longitude,
                    "format": "jsonv2",
                    "addressdetails": 1,
                    "accept-language": self.language,
                },
            )
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Reverse geocoding failed for %s: %s", coordinate, e)
            return None

        place = parse_place(data)
        if place is None:
            logger.warning("Reverse geocoding found no place for %s", coordinate)
        return place


def parse_place(data: object) -> PlaceName | None:
    """Map a Nominatim-style reverse geocoding payload to a PlaceName.

    City, region and a display label are all required; any of them missing means no place.
    """
    if not isinstance(data, dict) or "error" in data:
        return None
    address = data.get("address")
    if not isinstance(address, dict):
        return None

    city = _first(address, _CITY_KEYS)
    region = _first(address, _REGION_KEYS)
    label = _label(data, address)
    if not (city and region and label):
        return None
    return PlaceName(city=city, region=region, label=label)


def _label(data: dict, address: dict) -> str | None:
    name = data.get("name")
    if isinstance(name, str) and name.strip():
        return name.strip()
    street = " ".join(part for part in (address.get("house_number"), address.get("road")) if isinstance(part, str))
    if street.strip():
        return street.strip()
    display_name = data.get("display_name")
    if isinstance(display_name, str) and display_name.strip():
        return display_name.split(",")[0].strip() or None
    return None


def _first(address: dict, keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = address.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None
