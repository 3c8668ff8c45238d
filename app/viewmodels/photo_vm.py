"""Lightweight view model wrapper around `UserPhoto`."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

from core.models import UserPhoto
from core.services.location_log import format_coordinate, maps_url


@dataclass
class PhotoVM:
    """Expose convenient properties for bindings/templates."""

    record: UserPhoto

    @property
    def file_name(self) -> str:
        """Generated file name, falling back to the last path segment."""
        return self.record.file_name or PurePosixPath(self.record.filepath).name

    @property
    def has_location(self) -> bool:
        return self.record.location is not None

    @property
    def coordinates_text(self) -> str:
        """`lat,lon` or an empty string when not geotagged."""
        loc = self.record.location
        if loc is None:
            return ""
        return f"{format_coordinate(loc.lat)},{format_coordinate(loc.lon)}"

    @property
    def maps_url(self) -> str | None:
        loc = self.record.location
        return maps_url(loc) if loc is not None else None

    @property
    def display_src(self) -> str:
        """Source for an image element; empty when nothing can be shown."""
        return self.record.webview_path or ""
