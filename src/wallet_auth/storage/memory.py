"""Process-local storage backend for development and tests."""

from __future__ import annotations

from threading import Lock

from wallet_auth.storage.base import KeyValueStore


class MemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store; state is lost when the process exits."""

    def __init__(self, namespace: str) -> None:
        super().__init__(namespace)
        self._data: dict[str, str] = {}
        self._lock = Lock()

    async def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    async def put(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    async def compare_and_swap(self, key: str, expected: str | None, value: str) -> bool:
        with self._lock:
            if self._data.get(key) != expected:
                return False
            self._data[key] = value
            return True
