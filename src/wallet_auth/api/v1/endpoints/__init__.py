"""API endpoint modules for version 1."""

from .accounts import router as accounts_router
from .nonce import router as nonce_router
from .ping import router as ping_router

__all__ = [
    "accounts_router",
    "nonce_router",
    "ping_router",
]
