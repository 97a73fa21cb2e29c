"""Client-local key-value storage with change notification."""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from bitepath.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class StorageEvent:
    """Notification that a key was written."""

    key: str
    old_value: str | None
    new_value: str | None


StorageListener = Callable[[StorageEvent], None]


class KeyValueStore(ABC):
    """
    String-valued key-value store shared by every open grocery-list view.

    Writes are whole-value replacements. After each write every subscriber is
    notified, including the view that made the change.
    """

    def __init__(self) -> None:
        self._listeners: list[StorageListener] = []

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Read the raw value stored under key, or None."""
        pass

    @abstractmethod
    def _write(self, key: str, value: str | None) -> None:
        """Persist a value; None removes the key."""
        pass

    def set(self, key: str, value: str | None) -> None:
        """Write a value and notify subscribers."""
        old_value = self.get(key)
        self._write(key, value)
        self._notify(StorageEvent(key=key, old_value=old_value, new_value=value))

    def subscribe(self, listener: StorageListener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: StorageEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Storage listener failed for key {event.key!r}")


class MemoryStore(KeyValueStore):
    """In-process store for views that share a process, and for tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__()
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def _write(self, key: str, value: str | None) -> None:
        if value is None:
            self._data.pop(key, None)
        else:
            self._data[key] = value


class JsonFileStore(KeyValueStore):
    """
    Store backed by a single JSON document on disk.

    The file is re-read on every get so writes from another process are seen.
    Writes go to a temporary file that replaces the document atomically.
    """

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read storage file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.path} does not hold an object, ignoring it")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def _write(self, key: str, value: str | None) -> None:
        data = self._load()
        if value is None:
            data.pop(key, None)
        else:
            data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".storage-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError:
            Path(tmp_path).unlink(missing_ok=True)
            raise
