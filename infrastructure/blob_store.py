"""Filesystem-backed blob storage with named directories.

Each `Directory` maps to a subfolder of the storage root. Blobs are written
whole (overwrite semantics) and returned URIs use the `file://` scheme.
"""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

from core.errors import BlobNotFoundError, BlobStoreError
from core.services.display import file_uri_to_path
from core.services.interfaces import Directory, IBlobStore, ReadResult, WriteResult


def _ensure_dir(p: Path) -> None:
    """Create directory `p` if missing (including parents)."""
    p.mkdir(parents=True, exist_ok=True)


class FileSystemBlobStore(IBlobStore):
    """Blob store rooted at a local directory."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(os.path.expandvars(str(root))).expanduser()
        _ensure_dir(self._root)

    @property
    def root(self) -> Path:
        return self._root

    def directory_path(self, directory: Directory) -> Path:
        """Absolute folder backing `directory`."""
        return self._root / directory.value

    def _resolve(self, path: str, directory: Directory | None) -> Path:
        if directory is None:
            return Path(file_uri_to_path(path))
        base = self.directory_path(directory).resolve()
        target = (base / path).resolve()
        if base != target and base not in target.parents:
            raise BlobStoreError(f"Path escapes {directory.value} directory: {path}")
        return target

    def get_uri(self, path: str, directory: Directory = Directory.DATA) -> str:
        return self._resolve(path, directory).as_uri()

    def exists(self, path: str, directory: Directory | None = Directory.DATA) -> bool:
        return self._resolve(path, directory).is_file()

    def write(
        self,
        path: str,
        data: bytes | str,
        directory: Directory = Directory.DATA,
        recursive: bool = False,
    ) -> WriteResult:
        """Write `data` under `path`; text is stored as UTF-8.

        The directory itself is always created; intermediate folders inside
        `path` are only created when `recursive` is set.
        """
        target = self._resolve(path, directory)
        payload = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        try:
            _ensure_dir(self.directory_path(directory))
            if recursive:
                _ensure_dir(target.parent)
            tmp = target.with_name(target.name + ".tmp")
            with tmp.open("wb") as f:
                f.write(payload)
            os.replace(tmp, target)
        except OSError as ex:
            logger.error("Blob write failed for {}: {}", target, ex)
            raise BlobStoreError(f"Cannot write {path}: {ex}") from ex
        logger.debug("Wrote {} bytes to {}", len(payload), target)
        return WriteResult(uri=target.as_uri())

    def read(
        self, path: str, directory: Directory | None = None, encoding: str | None = None
    ) -> ReadResult:
        """Read a blob as bytes, or as text when `encoding` is given."""
        target = self._resolve(path, directory)
        try:
            with target.open("rb") as f:
                raw = f.read()
        except FileNotFoundError as ex:
            raise BlobNotFoundError(f"No such blob: {path}") from ex
        except OSError as ex:
            raise BlobStoreError(f"Cannot read {path}: {ex}") from ex
        if encoding is None:
            return ReadResult(data=raw)
        try:
            return ReadResult(data=raw.decode(encoding))
        except (UnicodeDecodeError, LookupError) as ex:
            raise BlobStoreError(f"Cannot decode {path} as {encoding}: {ex}") from ex

    def delete(self, path: str, directory: Directory = Directory.DATA) -> None:
        target = self._resolve(path, directory)
        try:
            target.unlink()
        except FileNotFoundError as ex:
            raise BlobNotFoundError(f"No such blob: {path}") from ex
        except OSError as ex:
            raise BlobStoreError(f"Cannot delete {path}: {ex}") from ex
