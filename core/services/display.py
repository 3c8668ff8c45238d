"""Environment-specific display references for gallery photos.

A native shell cannot render storage URIs directly, so they are converted to
a locally served URL and remain valid across restarts. A web context only has
an ephemeral capture path, so display data is rebuilt from the stored bytes
on every reload. Each behavior is one `DisplayResolver` variant, chosen once
at startup with `select_resolver`.
"""

from __future__ import annotations

import base64
import binascii
from enum import Enum
import sys
from urllib.parse import unquote, urlparse

from loguru import logger

from core.errors import CaptureError
from core.models import PhotoLocation, UserPhoto
from core.services.interfaces import CapturedImage, Directory, IBlobStore, WriteResult

DEFAULT_FILE_SRC_PREFIX = "http://localhost/_app_file_"
JPEG_MIME = "image/jpeg"


class Platform(str, Enum):
    """Execution context the gallery runs in."""

    NATIVE = "native"
    WEB = "web"


def detect_platform(configured: str | None = "auto") -> Platform:
    """Resolve the configured platform; `auto` means native on Android/iOS."""
    value = (configured or "auto").strip().lower()
    if value == "auto":
        return Platform.NATIVE if sys.platform in ("android", "ios") else Platform.WEB
    try:
        return Platform(value)
    except ValueError as ex:
        raise ValueError(f"Unknown platform: {configured!r}") from ex


def to_data_uri(data: bytes, mime: str = JPEG_MIME) -> str:
    """Embed `data` as a base64 `data:` URI."""
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def decode_data_uri(uri: str) -> bytes:
    """Return the payload of a base64 `data:` URI."""
    header, sep, payload = uri.partition(",")
    if not uri.startswith("data:") or not sep or not header.endswith(";base64"):
        raise ValueError("Not a base64 data URI")
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as ex:
        raise ValueError(f"Invalid base64 payload: {ex}") from ex


def file_uri_to_path(uri: str) -> str:
    """Strip a `file://` scheme, leaving plain paths untouched."""
    if uri.startswith("file://"):
        return unquote(urlparse(uri).path)
    return uri


class DisplayResolver:
    """Derives display references and reads capture bytes for one environment."""

    platform: Platform

    def __init__(self, blob_store: IBlobStore) -> None:
        self._blob_store = blob_store

    def read_capture(self, captured: CapturedImage) -> bytes:
        """Return the raw bytes of a captured image."""
        raise NotImplementedError

    def build_photo(
        self,
        saved: WriteResult,
        file_name: str,
        captured: CapturedImage,
        location: PhotoLocation | None,
    ) -> UserPhoto:
        """Create the gallery record for a freshly saved capture."""
        raise NotImplementedError

    def refresh(self, photo: UserPhoto) -> None:
        """Recompute `photo.webview_path` after a reload, if the environment needs it."""
        raise NotImplementedError


class NativeDisplayResolver(DisplayResolver):
    """Native shell: storage URIs are converted into locally served URLs."""

    platform = Platform.NATIVE

    def __init__(
        self, blob_store: IBlobStore, file_src_prefix: str = DEFAULT_FILE_SRC_PREFIX
    ) -> None:
        super().__init__(blob_store)
        self._file_src_prefix = file_src_prefix.rstrip("/")

    def convert_file_src(self, uri: str) -> str:
        """Map a storage URI onto the shell's local file server."""
        path = file_uri_to_path(uri)
        if not path.startswith("/"):
            path = "/" + path
        return f"{self._file_src_prefix}{path}"

    def read_capture(self, captured: CapturedImage) -> bytes:
        if not captured.path:
            raise CaptureError("Native capture did not report a file path")
        data = self._blob_store.read(captured.path).data
        return data if isinstance(data, bytes) else data.encode("utf-8")

    def build_photo(
        self,
        saved: WriteResult,
        file_name: str,
        captured: CapturedImage,
        location: PhotoLocation | None,
    ) -> UserPhoto:
        return UserPhoto(
            filepath=saved.uri,
            webview_path=self.convert_file_src(saved.uri),
            file_name=file_name,
            location=location,
        )

    def refresh(self, photo: UserPhoto) -> None:
        # Converted URIs stay valid across restarts.
        return


class WebDisplayResolver(DisplayResolver):
    """Web context: display data is rebuilt from stored bytes on reload."""

    platform = Platform.WEB

    def __init__(self, blob_store: IBlobStore, directory: Directory = Directory.DATA) -> None:
        super().__init__(blob_store)
        self._directory = directory

    def read_capture(self, captured: CapturedImage) -> bytes:
        if not captured.web_path:
            raise CaptureError("Web capture did not report a web path")
        if captured.web_path.startswith("data:"):
            try:
                return decode_data_uri(captured.web_path)
            except ValueError as ex:
                raise CaptureError(f"Unreadable capture data: {ex}") from ex
        data = self._blob_store.read(captured.web_path).data
        return data if isinstance(data, bytes) else data.encode("utf-8")

    def build_photo(
        self,
        saved: WriteResult,
        file_name: str,
        captured: CapturedImage,
        location: PhotoLocation | None,
    ) -> UserPhoto:
        return UserPhoto(
            filepath=file_name,
            webview_path=captured.web_path,
            file_name=file_name,
            location=location,
        )

    def refresh(self, photo: UserPhoto) -> None:
        data = self._blob_store.read(photo.filepath, self._directory).data
        if isinstance(data, str):
            data = data.encode("utf-8")
        photo.webview_path = to_data_uri(data)
        logger.debug("Rebuilt display data for {} ({} bytes)", photo.filepath, len(data))


def select_resolver(
    platform: Platform,
    blob_store: IBlobStore,
    file_src_prefix: str = DEFAULT_FILE_SRC_PREFIX,
) -> DisplayResolver:
    """Return the resolver variant for `platform`."""
    if platform is Platform.NATIVE:
        return NativeDisplayResolver(blob_store, file_src_prefix)
    return WebDisplayResolver(blob_store)
