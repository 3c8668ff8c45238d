"""Core service interfaces and shared data structures.

This module defines the contracts of the host capabilities the gallery
depends on (blob storage, key-value preferences, capture, position) and the
small dataclasses exchanged across them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Directory(str, Enum):
    """Storage areas a blob store exposes."""

    DATA = "data"
    CACHE = "cache"
    DOCUMENTS = "documents"


@dataclass
class WriteResult:
    """Outcome of a blob write.

    Attributes:
        uri: Storage-layer URI of the written blob.
    """

    uri: str


@dataclass
class ReadResult:
    """Outcome of a blob read.

    Attributes:
        data: Raw bytes, or text when the read requested an encoding.
    """

    data: bytes | str


@dataclass
class GetResult:
    """Outcome of a key-value lookup; `value` is None when the key is unset."""

    value: str | None


@dataclass
class CapturedImage:
    """Reference to a freshly captured image.

    Attributes:
        path: Native file path of the capture, when the source has one.
        web_path: Ephemeral display path usable right after capture.
        format: Image format reported by the source.
    """

    path: str | None
    web_path: str | None
    format: str = "jpeg"


@dataclass
class Position:
    """A resolved device position."""

    lat: float
    lon: float
    accuracy: float | None = None
    timestamp: float | None = None


class IBlobStore:
    """Interface for key-addressed blob storage with directory semantics."""

    def write(
        self,
        path: str,
        data: bytes | str,
        directory: Directory = Directory.DATA,
        recursive: bool = False,
    ) -> WriteResult:
        """Write `data` under `path`, overwriting any existing blob."""
        raise NotImplementedError

    def read(
        self, path: str, directory: Directory | None = None, encoding: str | None = None
    ) -> ReadResult:
        """Read a blob; without `directory`, `path` is an absolute path or file URI."""
        raise NotImplementedError


class IKeyValueStore:
    """Interface for a small persisted string-keyed store."""

    def set(self, key: str, value: str) -> None:
        """Store `value` under `key` (last write wins)."""
        raise NotImplementedError

    def get(self, key: str) -> GetResult:
        """Return the stored value for `key`."""
        raise NotImplementedError


class ICaptureSource:
    """Interface for camera-like capture sources."""

    def capture(self) -> CapturedImage:
        """Capture one image; raises `CaptureError` on failure."""
        raise NotImplementedError

    def release(self, captured: CapturedImage) -> None:
        """Discard temporary files behind `captured` once its bytes have been read."""
        return


class IPositionProvider:
    """Interface for current-position lookups."""

    def get_current_position(self) -> Position:
        """Return the current position; raises `PositionError` on failure."""
        raise NotImplementedError
