"""File-based capture source.

Stands in for a camera by taking the newest image dropped into an inbox
folder (tethered shooting, a synced camera roll). The image is normalized
with Pillow: EXIF orientation applied and re-encoded as RGB JPEG.
"""

from __future__ import annotations

import io
from pathlib import Path
import time

from loguru import logger
from PIL import Image, ImageOps, UnidentifiedImageError

from core.errors import CaptureError
from core.services.display import to_data_uri
from core.services.interfaces import CapturedImage, ICaptureSource

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".bmp", ".tif", ".tiff", ".gif"}


class FileCaptureSource(ICaptureSource):
    """Capture the most recently modified image of `inbox_dir`."""

    def __init__(self, inbox_dir: str | Path, cache_dir: str | Path, quality: int = 100) -> None:
        self._inbox = Path(inbox_dir)
        self._cache = Path(cache_dir)
        self._quality = max(1, min(100, int(quality)))

    def _latest_image(self) -> Path:
        try:
            candidates = [
                p
                for p in self._inbox.iterdir()
                if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS
            ]
        except OSError as ex:
            raise CaptureError(f"Capture inbox unavailable: {self._inbox} ({ex})") from ex
        if not candidates:
            raise CaptureError(f"No image to capture in {self._inbox}")
        return max(candidates, key=lambda p: p.stat().st_mtime)

    def _encode_jpeg(self, source: Path) -> bytes:
        try:
            with Image.open(source) as im:
                im = ImageOps.exif_transpose(im)
                if im.mode != "RGB":
                    im = im.convert("RGB")
                buf = io.BytesIO()
                im.save(buf, "JPEG", quality=self._quality)
                return buf.getvalue()
        except (UnidentifiedImageError, OSError, ValueError) as ex:
            raise CaptureError(f"Cannot decode {source}: {ex}") from ex

    def capture(self) -> CapturedImage:
        source = self._latest_image()
        data = self._encode_jpeg(source)
        try:
            self._cache.mkdir(parents=True, exist_ok=True)
            target = self._cache / f"capture_{time.time_ns()}.jpeg"
            target.write_bytes(data)
        except OSError as ex:
            raise CaptureError(f"Cannot stage capture: {ex}") from ex
        logger.info("Captured {} -> {} ({} bytes)", source.name, target, len(data))
        return CapturedImage(path=str(target), web_path=to_data_uri(data))

    def release(self, captured: CapturedImage) -> None:
        """Remove the staged JPEG; only files inside the cache directory are touched."""
        if not captured.path:
            return
        staged = Path(captured.path)
        if staged.parent.resolve() != self._cache.resolve():
            return
        try:
            staged.unlink(missing_ok=True)
        except OSError as ex:
            logger.warning("Could not remove staged capture {}: {}", staged, ex)
