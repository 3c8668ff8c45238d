"""Exception hierarchy shared by the core and infrastructure layers."""

from __future__ import annotations


class GalleryError(Exception):
    """Base class for all gallery failures."""


class CaptureError(GalleryError):
    """The capture source could not produce an image."""


class PositionError(GalleryError):
    """The position provider could not resolve a coordinate."""


class BlobStoreError(GalleryError):
    """A blob could not be read or written."""


class BlobNotFoundError(BlobStoreError):
    """The requested blob does not exist."""


class PreferencesError(GalleryError):
    """The key-value store could not be read or written."""


class LocationLogError(GalleryError):
    """The location log exists but could not be read for appending."""


class SettingsError(GalleryError):
    """Settings file is missing or malformed."""
