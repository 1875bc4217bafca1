"""Durable key-value storage used for nonces and password accounts."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from wallet_auth.core.settings import Settings
from wallet_auth.storage.base import KeyValueStore
from wallet_auth.storage.memory import MemoryKeyValueStore

logger = logging.getLogger(__name__)

__all__ = ["KeyValueStore", "MemoryKeyValueStore", "Storage", "open_storage"]


@dataclass
class Storage:
    """The pair of namespaced stores the application works with."""

    nonces: KeyValueStore
    accounts: KeyValueStore
    closers: list[Callable[[], Awaitable[None]]] = field(default_factory=list)

    async def initialize(self) -> None:
        await self.nonces.initialize()
        await self.accounts.initialize()

    async def close(self) -> None:
        for closer in self.closers:
            await closer()


def open_storage(settings: Settings) -> Storage:
    """Create stores for the configured backend.

    Clients connect lazily, so this is safe to call while building the app.
    """
    backend = settings.storage_backend
    logger.info("Using %s storage backend", backend)

    if backend == "redis":
        from wallet_auth.storage.redis_store import RedisKeyValueStore, create_redis_client

        client = create_redis_client(settings.redis_url)
        return Storage(
            nonces=RedisKeyValueStore(client, settings.nonce_namespace),
            accounts=RedisKeyValueStore(client, settings.account_namespace),
            closers=[client.aclose],
        )

    if backend == "sql":
        from wallet_auth.storage.sql import SqlKeyValueStore, create_sql_engine

        engine = create_sql_engine(settings)

        async def _dispose() -> None:
            engine.dispose()

        return Storage(
            nonces=SqlKeyValueStore(engine, settings.nonce_namespace),
            accounts=SqlKeyValueStore(engine, settings.account_namespace),
            closers=[_dispose],
        )

    return Storage(
        nonces=MemoryKeyValueStore(settings.nonce_namespace),
        accounts=MemoryKeyValueStore(settings.account_namespace),
    )
