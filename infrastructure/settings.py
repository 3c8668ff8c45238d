"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from core.errors import SettingsError
from core.services.gallery_service import GalleryConfig

DEFAULT_STORAGE_ROOT = "~/.geogallery"


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access."""

    def __init__(self, settings_path: str | Path) -> None:
        self._path = Path(settings_path)
        if not self._path.exists():
            raise SettingsError(f"settings.json not found: {self._path}")
        try:
            with self._path.open("r", encoding="utf-8") as f:
                self._data = json.load(f)
        except (OSError, ValueError) as ex:
            raise SettingsError(f"Invalid settings file {self._path}: {ex}") from ex
        if not isinstance(self._data, dict):
            raise SettingsError(f"Settings root must be an object: {self._path}")

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node


def storage_root(settings: JsonSettings) -> Path:
    """Base directory for blobs, preferences, and logs."""
    raw = settings.get("storage.root", DEFAULT_STORAGE_ROOT)
    if not isinstance(raw, str) or not raw.strip():
        raw = DEFAULT_STORAGE_ROOT
    return Path(os.path.expandvars(raw)).expanduser()


def load_gallery_config(settings: JsonSettings) -> GalleryConfig:
    """Build the gallery storage names from `storage.*` settings."""
    defaults = GalleryConfig()
    photos_key = settings.get("storage.photos_key", defaults.photos_key)
    locations_file = settings.get("storage.locations_file", defaults.locations_file)
    if not isinstance(photos_key, str) or not photos_key:
        raise SettingsError("storage.photos_key must be a non-empty string")
    if not isinstance(locations_file, str) or not locations_file:
        raise SettingsError("storage.locations_file must be a non-empty string")
    return GalleryConfig(photos_key=photos_key, locations_file=locations_file)
