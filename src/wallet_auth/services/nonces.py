"""Replay protection nonces for wallet public keys."""

from __future__ import annotations

import logging
import re
from typing import Final

from wallet_auth.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

_NONCE_PATTERN: Final[re.Pattern[str]] = re.compile(r"[0-9]+")


def parse_nonce(raw: str | None) -> int:
    """Return the nonce encoded in ``raw``; absent or malformed values read as 0."""
    if raw is None:
        return 0
    cleaned = raw.strip()
    if not _NONCE_PATTERN.fullmatch(cleaned):
        return 0
    return int(cleaned)


class NonceService:
    """Per-public-key monotonic counters preventing replay of signed requests.

    This is the only component that reads or writes nonce records. Records are
    created implicitly (an unseen key reads 0) and are never deleted.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    async def get_nonce(self, public_key: str) -> int:
        """Return the current nonce for ``public_key``."""
        return parse_nonce(await self._store.get(public_key))

    async def set_nonce(self, public_key: str, nonce: int) -> None:
        """Overwrite the nonce for ``public_key``."""
        if nonce < 0:
            raise ValueError("Nonce must be a non-negative integer")
        await self._store.put(public_key, str(nonce))

    async def advance_nonce(self, public_key: str, expected: int) -> bool:
        """Increment the nonce from ``expected`` to ``expected + 1`` atomically.

        Returns False when the stored nonce no longer equals ``expected``,
        which happens when a concurrent request consumed it first.
        """
        raw = await self._store.get(public_key)
        if parse_nonce(raw) != expected:
            return False
        advanced = await self._store.compare_and_swap(public_key, raw, str(expected + 1))
        if not advanced:
            logger.warning("Nonce for %s was advanced concurrently from %d", public_key, expected)
        return advanced
