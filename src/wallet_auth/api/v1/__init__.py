# src/wallet_auth/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import accounts_router, nonce_router, ping_router

__all__ = [
    "accounts_router",
    "nonce_router",
    "ping_router",
]
