from __future__ import annotations

import io
import os
from pathlib import Path

from PIL import Image
import pytest

from core.errors import CaptureError
from core.services.display import Platform, decode_data_uri, select_resolver
from core.services.gallery_service import GalleryManager
from core.services.interfaces import CapturedImage, Directory
from infrastructure.camera import FileCaptureSource
from infrastructure.geolocation import FixedPositionProvider


def _save_image(path, color, size=(8, 4), fmt="PNG"):
    Image.new("RGBA" if fmt == "PNG" else "RGB", size, color).save(path, fmt)


def test_captures_newest_image_as_jpeg(tmp_path):
    inbox = tmp_path / "inbox"
    inbox.mkdir()
    old = inbox / "old.png"
    new = inbox / "new.png"
    _save_image(old, (255, 0, 0, 255))
    _save_image(new, (0, 0, 255, 255), size=(6, 3))
    os.utime(old, (1_000, 1_000))
    os.utime(new, (2_000, 2_000))

    source = FileCaptureSource(inbox, tmp_path / "cache", quality=90)
    captured = source.capture()

    data = Path(captured.path).read_bytes()
    assert data == decode_data_uri(captured.web_path)
    with Image.open(io.BytesIO(data)) as im:
        assert im.format == "JPEG"
        assert im.mode == "RGB"
        assert im.size == (6, 3)


def test_empty_inbox(tmp_path):
    inbox = tmp_path / "inbox"
    inbox.mkdir()
    (inbox / "readme.txt").write_text("not an image")
    with pytest.raises(CaptureError, match="No image"):
        FileCaptureSource(inbox, tmp_path / "cache").capture()


def test_missing_inbox(tmp_path):
    with pytest.raises(CaptureError):
        FileCaptureSource(tmp_path / "absent", tmp_path / "cache").capture()


def test_undecodable_image(tmp_path):
    inbox = tmp_path / "inbox"
    inbox.mkdir()
    (inbox / "broken.jpg").write_bytes(b"not really a jpeg")
    with pytest.raises(CaptureError, match="Cannot decode"):
        FileCaptureSource(inbox, tmp_path / "cache").capture()


@pytest.mark.parametrize("platform", [Platform.NATIVE, Platform.WEB])
def test_staged_captures_are_removed_after_save(tmp_path, blob_store, preferences, platform):
    inbox = tmp_path / "inbox"
    inbox.mkdir()
    _save_image(inbox / "shot.jpg", (1, 2, 3), fmt="JPEG")
    cache = blob_store.directory_path(Directory.CACHE)
    manager = GalleryManager(
        blob_store=blob_store,
        preferences=preferences,
        capture_source=FileCaptureSource(inbox, cache),
        position_provider=FixedPositionProvider(1.5, 2.5),
        resolver=select_resolver(platform, blob_store),
        clock=iter(range(1000, 2000)).__next__,
    )

    for _ in range(5):
        manager.capture_and_save()

    assert list(cache.glob("capture_*.jpeg")) == []
    assert len(manager.photos) == 5
    assert (inbox / "shot.jpg").exists()


def test_release_leaves_foreign_files_alone(tmp_path):
    outside = tmp_path / "keep.jpeg"
    outside.write_bytes(b"x")
    source = FileCaptureSource(tmp_path / "inbox", tmp_path / "cache")
    source.release(CapturedImage(path=str(outside), web_path=None))
    source.release(CapturedImage(path=None, web_path="data:image/jpeg;base64,"))
    assert outside.exists()
