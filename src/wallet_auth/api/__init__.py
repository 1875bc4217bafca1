"""HTTP API for wallet-signed and password-based authentication."""

from .v1 import accounts_router, nonce_router, ping_router

__all__ = [
    "accounts_router",
    "nonce_router",
    "ping_router",
]
