"""Best-effort position lookup expressed as an explicit result type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from loguru import logger

from core.models import PhotoLocation
from core.services.interfaces import IPositionProvider


@dataclass(frozen=True)
class PositionFix:
    """A resolved coordinate pair."""

    location: PhotoLocation


@dataclass(frozen=True)
class PositionUnavailable:
    """No coordinate could be resolved; `reason` is for logs only."""

    reason: str


PositionResult = Union[PositionFix, PositionUnavailable]


def locate(provider: IPositionProvider | None) -> PositionResult:
    """Ask `provider` for the current position without ever raising.

    Any provider failure (timeout, permission denial, missing hardware) is
    downgraded to `PositionUnavailable` and logged as a warning.
    """
    if provider is None:
        return PositionUnavailable("no position provider configured")
    try:
        pos = provider.get_current_position()
        return PositionFix(PhotoLocation(lat=float(pos.lat), lon=float(pos.lon)))
    except Exception as ex:  # pylint: disable=broad-exception-caught
        logger.warning("Could not obtain location: {}", ex)
        return PositionUnavailable(str(ex) or type(ex).__name__)
