from __future__ import annotations

from collections.abc import Callable, Iterator
import itertools
from pathlib import Path

from loguru import logger
import pytest

from core.errors import PositionError
from core.services.display import Platform, select_resolver, to_data_uri
from core.services.gallery_service import GalleryManager
from core.services.interfaces import CapturedImage, ICaptureSource, IPositionProvider, Position
from infrastructure.blob_store import FileSystemBlobStore
from infrastructure.preferences import JsonPreferences

JPEG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg-payload\xff\xd9"


class FakeCapture(ICaptureSource):
    """Writes a fixed payload to a temp file and reports it like a camera would."""

    def __init__(self, tmp_dir: Path, payload: bytes = JPEG_BYTES) -> None:
        self._tmp_dir = tmp_dir
        self.payload = payload
        self.fail_with: Exception | None = None
        self.calls = 0
        self.released: list[CapturedImage] = []

    def capture(self) -> CapturedImage:
        self.calls += 1
        if self.fail_with is not None:
            raise self.fail_with
        path = self._tmp_dir / f"shot_{self.calls}.jpg"
        path.write_bytes(self.payload)
        return CapturedImage(path=str(path), web_path=to_data_uri(self.payload))

    def release(self, captured: CapturedImage) -> None:
        self.released.append(captured)


class FakePosition(IPositionProvider):
    """Replays queued positions; queued exceptions are raised instead."""

    def __init__(self) -> None:
        self.queue: list[Position | Exception] = []

    def push(self, lat: float, lon: float) -> None:
        self.queue.append(Position(lat=lat, lon=lon))

    def fail(self, ex: Exception | None = None) -> None:
        self.queue.append(ex or PositionError("permission denied"))

    def get_current_position(self) -> Position:
        if not self.queue:
            raise PositionError("timeout")
        item = self.queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture()
def blob_store(tmp_path: Path) -> FileSystemBlobStore:
    return FileSystemBlobStore(tmp_path / "store")


@pytest.fixture()
def preferences(tmp_path: Path) -> JsonPreferences:
    return JsonPreferences(tmp_path / "store" / "preferences.json")


@pytest.fixture()
def capture(tmp_path: Path) -> FakeCapture:
    shots = tmp_path / "shots"
    shots.mkdir()
    return FakeCapture(shots)


@pytest.fixture()
def position() -> FakePosition:
    return FakePosition()


@pytest.fixture()
def make_manager(
    blob_store: FileSystemBlobStore,
    preferences: JsonPreferences,
    capture: FakeCapture,
    position: FakePosition,
) -> Callable[..., GalleryManager]:
    def _make(
        platform: Platform = Platform.NATIVE,
        start: int = 1000,
        position_provider: IPositionProvider | None = None,
    ) -> GalleryManager:
        counter = itertools.count(start)
        return GalleryManager(
            blob_store=blob_store,
            preferences=preferences,
            capture_source=capture,
            position_provider=position_provider or position,
            resolver=select_resolver(platform, blob_store),
            clock=lambda: next(counter),
        )

    return _make


@pytest.fixture()
def log_messages() -> Iterator[list[str]]:
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
