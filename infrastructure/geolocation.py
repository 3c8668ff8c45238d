"""Position providers: fixed point, IP geolocation over HTTP, or none."""

from __future__ import annotations

import json
import time
from typing import Any

import httpx
from loguru import logger

from core.errors import PositionError
from core.services.interfaces import IPositionProvider, Position

DEFAULT_URL = "http://ip-api.com/json/"
_DEFAULT_TIMEOUT = 10.0


class FixedPositionProvider(IPositionProvider):
    """Always reports the configured point."""

    def __init__(self, lat: float, lon: float) -> None:
        self._lat = float(lat)
        self._lon = float(lon)

    def get_current_position(self) -> Position:
        return Position(lat=self._lat, lon=self._lon, timestamp=time.time())


class UnavailablePositionProvider(IPositionProvider):
    """Behaves like a device with location disabled."""

    def __init__(self, reason: str = "location services disabled") -> None:
        self._reason = reason

    def get_current_position(self) -> Position:
        raise PositionError(self._reason)


def _coordinate(payload: dict[str, Any], *names: str) -> float:
    for name in names:
        if name in payload and payload[name] is not None:
            try:
                return float(payload[name])
            except (TypeError, ValueError) as ex:
                raise PositionError(f"Invalid {name} in response: {payload[name]!r}") from ex
    raise PositionError(f"Response is missing {'/'.join(names)}")


class HttpPositionProvider(IPositionProvider):
    """Approximate position from an IP geolocation endpoint.

    The endpoint must answer with a JSON object carrying `lat`/`lon` or
    `latitude`/`longitude`.
    """

    def __init__(self, url: str = DEFAULT_URL, timeout: float | None = None) -> None:
        self._url = url
        self._timeout = float(timeout) if timeout else _DEFAULT_TIMEOUT

    def get_current_position(self) -> Position:
        try:
            response = httpx.get(self._url, timeout=self._timeout)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as ex:
            raise PositionError(f"Geolocation request failed: {ex}") from ex
        except json.JSONDecodeError as ex:
            raise PositionError(f"Geolocation response is not JSON: {ex}") from ex
        if not isinstance(payload, dict):
            raise PositionError("Geolocation response is not an object")
        if payload.get("status") == "fail":
            raise PositionError(f"Geolocation lookup failed: {payload.get('message', 'unknown')}")
        lat = _coordinate(payload, "lat", "latitude")
        lon = _coordinate(payload, "lon", "longitude")
        logger.debug("Geolocation {} -> {},{}", self._url, lat, lon)
        return Position(lat=lat, lon=lon, accuracy=payload.get("accuracy"), timestamp=time.time())


def build_position_provider(settings: Any) -> IPositionProvider | None:
    """Select a provider from `geolocation.*` settings."""
    kind = str(settings.get("geolocation.provider", "fixed") or "fixed").lower()
    if kind == "none":
        return None
    if kind == "http":
        return HttpPositionProvider(
            url=settings.get("geolocation.url", DEFAULT_URL),
            timeout=settings.get("geolocation.timeout", _DEFAULT_TIMEOUT),
        )
    if kind == "fixed":
        lat = settings.get("geolocation.latitude")
        lon = settings.get("geolocation.longitude")
        if lat is None or lon is None:
            logger.warning("Fixed geolocation without coordinates; photos will not be geotagged")
            return UnavailablePositionProvider("no fixed coordinates configured")
        return FixedPositionProvider(lat, lon)
    raise ValueError(f"Unknown geolocation provider: {kind}")
