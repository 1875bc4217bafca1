"""Key-value storage interface shared by every backend."""

from __future__ import annotations

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Namespaced string key-value store with an atomic compare-and-swap.

    Backends wrap their own client errors in ``StorageUnavailable`` so callers
    only need to handle one failure type.
    """

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored value for ``key`` or None when absent."""

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """Overwrite the value stored under ``key``."""

    @abstractmethod
    async def compare_and_swap(self, key: str, expected: str | None, value: str) -> bool:
        """Store ``value`` only if the current value equals ``expected``.

        ``expected=None`` means the key must not exist yet. Returns True when
        the write happened.
        """

    async def initialize(self) -> None:
        """Prepare backend resources such as tables."""

    def qualified_key(self, key: str) -> str:
        return f"{self.namespace}:{key}"
