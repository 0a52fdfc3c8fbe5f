from __future__ import annotations

import hashlib
import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Tuple

logger = logging.getLogger("hacker_stories")


class StorageError(Exception):
    """The durable store could not be read or written."""


class KeyValueStore(ABC):
    """Narrow get/set contract for durable string storage."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class FileStore(KeyValueStore):
    """One JSON file per key under ``storage_dir``."""

    def __init__(self, storage_dir: str):
        self.storage_dir = storage_dir
        try:
            os.makedirs(self.storage_dir, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Storage directory {storage_dir} is unavailable: {e}") from e

    def _get_path(self, key: str) -> str:
        hashed_key = hashlib.sha256(key.encode()).hexdigest()
        return os.path.join(self.storage_dir, f"{hashed_key}.json")

    def get(self, key: str) -> Optional[str]:
        path = self._get_path(key)
        if not os.path.exists(path):
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Failed to read storage file %s: %s", path, e)
            return None

        value = data.get("value") if isinstance(data, dict) else None
        if not isinstance(value, str):
            logger.warning("Ignoring non-string value stored for key: %s", key)
            return None
        logger.debug("Storage hit for key: %s", key)
        return value

    def set(self, key: str, value: str) -> None:
        path = self._get_path(key)
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump({"key": key, "value": value}, f)
        except OSError as e:
            raise StorageError(f"Failed to write storage file {path}: {e}") from e
        logger.debug("Storage set for key: %s", key)


class PersistedCell:
    """A single string kept in sync with ``store`` under ``key``.

    The initial value comes from the store when present, otherwise from
    ``fallback``. Every ``set`` performs exactly one write; a failed write is
    logged and dropped while the in-memory value stays current.
    """

    def __init__(self, store: KeyValueStore, key: str = "search", fallback: str = ""):
        self.store = store
        self.key = key
        self._listeners: List[Callable[[str], None]] = []
        try:
            stored = store.get(key)
        except StorageError as e:
            logger.warning("Could not read %r from storage, using fallback: %s", key, e)
            stored = None
        self._value = stored if stored is not None else fallback

    @property
    def value(self) -> str:
        return self._value

    def set(self, new_value: str) -> None:
        self._value = new_value
        try:
            self.store.set(self.key, new_value)
        except StorageError as e:
            logger.warning("Dropped write of %r: %s", self.key, e)
        for listener in list(self._listeners):
            listener(new_value)

    def subscribe(self, listener: Callable[[str], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


def use_persisted_state(
    store: KeyValueStore, key: str, fallback: str
) -> Tuple[str, Callable[[str], None]]:
    """Return ``(value, set_value)`` for a freshly created cell."""
    cell = PersistedCell(store, key, fallback)
    return cell.value, cell.set
