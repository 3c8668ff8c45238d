"""Core domain models for gallery photos and their locations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PhotoLocation:
    """Latitude/longitude pair in degrees. Ranges are not validated."""

    lat: float
    lon: float

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lon": self.lon}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PhotoLocation:
        return cls(lat=float(data["lat"]), lon=float(data["lon"]))


@dataclass
class UserPhoto:
    """A single gallery entry.

    Attributes:
        filepath: Durable storage identifier of the image blob.
        webview_path: Display reference derived for the current environment.
        file_name: Generated `<millis>.jpeg` blob name, also the log join key.
        location: Capture-time position, when one could be resolved.
    """

    filepath: str
    webview_path: str | None = None
    file_name: str | None = None
    location: PhotoLocation | None = None

    @property
    def log_name(self) -> str:
        """Name written to the location log."""
        return self.file_name if self.file_name is not None else self.filepath

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the persisted camelCase keys, omitting absent fields."""
        data: dict[str, Any] = {"filepath": self.filepath}
        if self.webview_path is not None:
            data["webviewPath"] = self.webview_path
        if self.file_name is not None:
            data["fileName"] = self.file_name
        if self.location is not None:
            data["location"] = self.location.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserPhoto:
        raw_location = data.get("location")
        return cls(
            filepath=str(data["filepath"]),
            webview_path=data.get("webviewPath"),
            file_name=data.get("fileName"),
            location=PhotoLocation.from_dict(raw_location) if raw_location else None,
        )
