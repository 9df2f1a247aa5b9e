import copy
import threading
from typing import Any

from altseo.storage.base import BaseKeyValueStore


class InMemoryKeyValueStore(BaseKeyValueStore):
    """Process-local store. Useful for tests and single-process runs."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            if key not in self._data:
                return default
            return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def compare_and_set(self, key: str, expected: Any, new: Any) -> bool:
        with self._lock:
            current = self._data.get(key)
            if current != expected:
                return False
            self._data[key] = copy.deepcopy(new)
            return True

    def compare_and_delete(self, key: str, expected: Any) -> bool:
        with self._lock:
            if key not in self._data or self._data[key] != expected:
                return False
            del self._data[key]
            return True

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._data)
