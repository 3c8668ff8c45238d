"""ViewModel exposing the gallery to a UI layer."""

from __future__ import annotations

from loguru import logger

from app.viewmodels.photo_vm import PhotoVM
from core.errors import GalleryError
from core.services.gallery_service import GalleryManager


class GalleryVM:
    """Mediates between `GalleryManager` and list-style UI bindings."""

    def __init__(self, manager: GalleryManager) -> None:
        self._manager = manager
        self.items: list[PhotoVM] = []
        self.last_error: str | None = None

    def load(self) -> None:
        """Reload saved photos into `items`."""
        self._manager.load_saved()
        self._rebuild()

    def take_photo(self) -> PhotoVM | None:
        """Run one capture; returns the new item, or None with `last_error` set."""
        self.last_error = None
        try:
            photo = self._manager.capture_and_save()
        except GalleryError as ex:
            logger.error("Capture failed: {}", ex)
            self.last_error = str(ex)
            return None
        finally:
            self._rebuild()
        logger.debug("Captured {}", photo.log_name)
        return self.items[0]

    @property
    def locations_text(self) -> str:
        return self._manager.get_locations_file_content()

    @property
    def count(self) -> int:
        return len(self.items)

    def _rebuild(self) -> None:
        self.items = [PhotoVM(p) for p in self._manager.photos]
