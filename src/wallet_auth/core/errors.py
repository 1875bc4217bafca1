"""Error taxonomy for signed-request authentication."""

from __future__ import annotations

from fastapi import status


class WalletAuthError(Exception):
    """Base exception for every failure the auth gate can report.

    Each subclass carries the HTTP status code and client-facing detail that
    the API layer uses when it turns a rejection into a response.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.detail)


class MalformedRequest(WalletAuthError):
    """The body is missing required fields or carries the wrong types."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid body"


class NonceMismatch(WalletAuthError):
    """The claim nonce does not equal the stored nonce for the public key."""

    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Unauthorized. Invalid nonce."


class SignatureInvalid(WalletAuthError):
    """The signature does not match the canonical message and public key."""

    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Unauthorized. Invalid signature."


class InvalidPublicKey(SignatureInvalid, ValueError):
    """The public key is not hex or not a compressed secp256k1 point."""


class StorageUnavailable(WalletAuthError):
    """The underlying key-value store failed to read or write."""

    detail = "Storage unavailable"
