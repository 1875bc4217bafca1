"""Request and response schemas."""

from .accounts import Account, CredentialsRequest, ErrorResponse, TokenResponse, UsernameResponse
from .auth import AuthClaim, NonceResponse, PingResponse, RequestEnvelope, SignedData

__all__ = [
    "Account",
    "AuthClaim",
    "CredentialsRequest",
    "ErrorResponse",
    "NonceResponse",
    "PingResponse",
    "RequestEnvelope",
    "SignedData",
    "TokenResponse",
    "UsernameResponse",
]
