"""Formatting of location log lines and map links."""

from __future__ import annotations

from decimal import Decimal
import math

from core.models import PhotoLocation, UserPhoto

MAPS_URL = "https://www.google.com/maps?q={lat},{lon}"
PLACEHOLDER = "No locations recorded."


def format_coordinate(value: float) -> str:
    """Shortest round-trip text for `value`, in the host's number notation.

    Positional between 1e-6 and 1e21, exponent form outside it with an
    unpadded exponent (`1e-7`, `1.5e+22`); integral values drop `.0`.
    """
    value = float(value)
    if not math.isfinite(value):
        return repr(value)
    text = repr(value)
    if abs(value) >= 1e21 or (value != 0 and abs(value) < 1e-6):
        mantissa, _, exponent = text.partition("e")
        sign = "-" if exponent.startswith("-") else "+"
        return f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0') or '0'}"
    if value == int(value):
        return str(int(value))
    return format(Decimal(text), "f")


def maps_url(location: PhotoLocation) -> str:
    lat = format_coordinate(location.lat)
    lon = format_coordinate(location.lon)
    return MAPS_URL.format(lat=lat, lon=lon)


def format_line(photo: UserPhoto) -> str | None:
    """Return the newline-terminated log line for `photo`, or None without a location."""
    if photo.location is None:
        return None
    lat = format_coordinate(photo.location.lat)
    lon = format_coordinate(photo.location.lon)
    return f"{photo.log_name} | {lat},{lon} | {maps_url(photo.location)}\n"
