# tests/conftest.py
from __future__ import annotations

import asyncio
from collections.abc import Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from wallet_auth.core.settings import Settings
from wallet_auth.main import create_app
from wallet_auth.storage import MemoryKeyValueStore, Storage
from wallet_auth.storage.base import KeyValueStore
from wallet_auth.utils.signer import WalletSigner

TEST_CHAIN_ID = "juno-1"
TEST_FEE_DENOM = "ujuno"
TEST_BECH32_PREFIX = "juno"


class CountingKeyValueStore(KeyValueStore):
    """Memory store that records every call made against it."""

    def __init__(self, namespace: str, *, yield_on_get: bool = False) -> None:
        super().__init__(namespace)
        self._inner = MemoryKeyValueStore(namespace)
        self._yield_on_get = yield_on_get
        self.calls: list[tuple[str, str]] = []

    async def get(self, key: str) -> str | None:
        self.calls.append(("get", key))
        if self._yield_on_get:
            # Let concurrent tasks interleave between read and write.
            await asyncio.sleep(0)
        return await self._inner.get(key)

    async def put(self, key: str, value: str) -> None:
        self.calls.append(("put", key))
        await self._inner.put(key, value)

    async def compare_and_swap(self, key: str, expected: str | None, value: str) -> bool:
        self.calls.append(("compare_and_swap", key))
        return await self._inner.compare_and_swap(key, expected, value)


@pytest.fixture()
def test_settings() -> Settings:
    """Provide isolated settings backed by in-memory storage."""
    return Settings(storage_backend="memory", access_token_expire_seconds=60)


@pytest.fixture()
def nonce_store() -> CountingKeyValueStore:
    return CountingKeyValueStore("nonces")


@pytest.fixture()
def account_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore("auth")


@pytest.fixture()
def storage(nonce_store: CountingKeyValueStore, account_store: MemoryKeyValueStore) -> Storage:
    return Storage(nonces=nonce_store, accounts=account_store)


@pytest.fixture()
def app(test_settings: Settings, storage: Storage) -> FastAPI:
    return create_app(test_settings, storage=storage)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def signer() -> WalletSigner:
    """Return a wallet key pair for the primary test user."""
    return WalletSigner.generate()


@pytest.fixture()
def other_signer() -> WalletSigner:
    """Return a wallet key pair for a second user."""
    return WalletSigner.generate()


def build_signed_body(
    signer: WalletSigner,
    nonce: int,
    extra: dict[str, Any] | None = None,
    *,
    sign_type: str = "Verify",
) -> dict[str, Any]:
    """Return a signed request envelope for ``signer`` at ``nonce``."""
    data: dict[str, Any] = {
        "auth": signer.build_auth(
            nonce=nonce,
            chain_id=TEST_CHAIN_ID,
            chain_fee_denom=TEST_FEE_DENOM,
            chain_bech32_prefix=TEST_BECH32_PREFIX,
            sign_type=sign_type,
        ),
    }
    data.update(extra or {})
    return signer.sign_request(data)
