"""Gallery orchestration: capture, geotag, persist, and reload photos.

`GalleryManager` owns the in-memory photo list for its lifetime. Each capture
runs as one sequential pipeline (capture, locate, save blob, update index,
append location log) with no rollback between steps; captures are serialized
by an in-process lock so the index snapshot and the log rewrite never
interleave.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import json
import threading
import time

from loguru import logger

from core.errors import (
    BlobNotFoundError,
    BlobStoreError,
    GalleryError,
    LocationLogError,
    PreferencesError,
)
from core.models import UserPhoto
from core.services.display import DisplayResolver
from core.services.interfaces import (
    Directory,
    IBlobStore,
    ICaptureSource,
    IKeyValueStore,
    IPositionProvider,
)
from core.services.location_log import PLACEHOLDER, format_line
from core.services.positioning import PositionFix, locate


@dataclass(frozen=True)
class GalleryConfig:
    """Storage names used by the gallery.

    Attributes:
        photos_key: Key-value key holding the JSON index snapshot.
        locations_file: Blob name of the location log.
        directory: Storage area for photo blobs and the log.
    """

    photos_key: str = "photos"
    locations_file: str = "locations.txt"
    directory: Directory = Directory.DATA


def _now_millis() -> int:
    return int(time.time() * 1000)


class GalleryManager:
    """Coordinates the capture pipeline and the persisted gallery state."""

    def __init__(
        self,
        blob_store: IBlobStore,
        preferences: IKeyValueStore,
        capture_source: ICaptureSource,
        position_provider: IPositionProvider | None,
        resolver: DisplayResolver,
        clock: Callable[[], int] | None = None,
        config: GalleryConfig | None = None,
    ) -> None:
        """Create a manager.

        Args:
            blob_store: Storage for photo blobs and the location log.
            preferences: Key-value store holding the index snapshot.
            capture_source: Source of new images.
            position_provider: Best-effort position lookup; None disables geotagging.
            resolver: Display-reference strategy for the current platform.
            clock: Returns the capture time in milliseconds (defaults to wall clock).
            config: Storage names (defaults to `GalleryConfig()`).
        """
        self._blob_store = blob_store
        self._preferences = preferences
        self._capture_source = capture_source
        self._position_provider = position_provider
        self._resolver = resolver
        self._clock = clock or _now_millis
        self._config = config or GalleryConfig()
        self._lock = threading.Lock()
        self.photos: list[UserPhoto] = []

    @property
    def config(self) -> GalleryConfig:
        return self._config

    def capture_and_save(self) -> UserPhoto:
        """Capture a photo, geotag it when possible, and persist it.

        Capture, blob write and index write failures propagate unchanged; a
        failed position lookup only drops the location.
        """
        with self._lock:
            captured = self._capture_source.capture()
            try:
                position = locate(self._position_provider)
                location = position.location if isinstance(position, PositionFix) else None
                data = self._resolver.read_capture(captured)
            finally:
                self._capture_source.release(captured)

            file_name = f"{self._clock()}.jpeg"
            saved = self._blob_store.write(file_name, data, self._config.directory)
            photo = self._resolver.build_photo(saved, file_name, captured, location)
            logger.info("Saved photo {} ({} bytes) -> {}", file_name, len(data), saved.uri)

            self._insert(photo)
            self._persist_index()
            self._append_location(photo)
            return photo

    def load_saved(self) -> list[UserPhoto]:
        """Replace the in-memory list with the last persisted snapshot.

        Any unreadable blob fails the whole reload and leaves the current list
        untouched.
        """
        raw = self._preferences.get(self._config.photos_key).value
        photos = self._parse_index(raw)
        for photo in photos:
            self._resolver.refresh(photo)
        self.photos = photos
        logger.info("Loaded {} saved photo(s)", len(photos))
        return self.photos

    def get_locations_file_content(self) -> str:
        """Return the location log text, or a placeholder when it cannot be read."""
        try:
            data = self._blob_store.read(
                self._config.locations_file, self._config.directory, encoding="utf-8"
            ).data
        except (GalleryError, OSError, ValueError) as ex:
            logger.debug("Location log unavailable: {}", ex)
            return PLACEHOLDER
        return data if isinstance(data, str) else data.decode("utf-8")

    def snapshot(self) -> list[dict]:
        """Serializable copy of the in-memory list, as written to the index."""
        return [p.to_dict() for p in self.photos]

    # Internal helpers
    def _insert(self, photo: UserPhoto) -> None:
        """Insert `photo` at the head, dropping any entry with the same file name."""
        if photo.file_name is not None:
            before = len(self.photos)
            self.photos = [p for p in self.photos if p.file_name != photo.file_name]
            if len(self.photos) != before:
                logger.warning("Replaced existing gallery entry {}", photo.file_name)
        self.photos.insert(0, photo)

    def _persist_index(self) -> None:
        self._preferences.set(self._config.photos_key, json.dumps(self.snapshot()))

    def _parse_index(self, raw: str | None) -> list[UserPhoto]:
        if not raw:
            return []
        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError(f"expected a JSON array, got {type(items).__name__}")
            return [UserPhoto.from_dict(item) for item in items]
        except (ValueError, TypeError, KeyError) as ex:
            raise PreferencesError(
                f"Corrupt photo index under {self._config.photos_key!r}: {ex}"
            ) from ex

    def _append_location(self, photo: UserPhoto) -> None:
        """Append the log line for `photo` by rewriting the whole log blob."""
        line = format_line(photo)
        if line is None:
            return
        try:
            existing = self._blob_store.read(
                self._config.locations_file, self._config.directory, encoding="utf-8"
            ).data
        except BlobNotFoundError:
            existing = ""
        except BlobStoreError as ex:
            # Rewriting here would truncate the existing log.
            raise LocationLogError(f"Cannot read {self._config.locations_file}: {ex}") from ex
        if isinstance(existing, bytes):
            existing = existing.decode("utf-8")
        self._blob_store.write(
            self._config.locations_file,
            existing + line,
            self._config.directory,
            recursive=True,
        )
        logger.info("Location logged for {}", photo.log_name)
