"""JSON-file key-value store for small string preferences."""

from __future__ import annotations

import json
import os
from pathlib import Path

from loguru import logger

from core.errors import PreferencesError
from core.services.interfaces import GetResult, IKeyValueStore


class JsonPreferences(IKeyValueStore):
    """String-keyed store persisted as one JSON object.

    The whole file is rewritten on every mutation; last write wins.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._data: dict[str, str] = self._load()

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as ex:
            raise PreferencesError(f"Cannot read preferences {self._path}: {ex}") from ex
        if not isinstance(data, dict):
            raise PreferencesError(f"Preferences file is not a JSON object: {self._path}")
        return {str(k): str(v) for k, v in data.items()}

    def _flush(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_name(self._path.name + ".tmp")
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(self._data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except OSError as ex:
            logger.error("Write preferences failed: {}", ex)
            raise PreferencesError(f"Cannot write preferences {self._path}: {ex}") from ex

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def get(self, key: str) -> GetResult:
        return GetResult(value=self._data.get(key))

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    def keys(self) -> list[str]:
        return list(self._data)

    def clear(self) -> None:
        self._data = {}
        self._flush()
