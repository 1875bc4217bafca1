"""Auth gate for wallet-signed requests.

Each request moves through
``Received -> StructurallyValidated -> NonceChecked -> SignatureVerified ->
Authorized`` and can drop to ``Rejected`` from any step. The nonce is
advanced exactly once, after the signature checks out and before the
protected handler runs; a captured request therefore cannot be replayed,
because its embedded nonce no longer matches after its first use.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, TypeAlias

from pydantic import ValidationError

from wallet_auth.core.errors import (
    MalformedRequest,
    NonceMismatch,
    SignatureInvalid,
    WalletAuthError,
)
from wallet_auth.schemas.auth import AuthClaim, RequestEnvelope
from wallet_auth.services.nonces import NonceService
from wallet_auth.services.signing import verify_request_signature

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Authorized:
    """Successful outcome: the verified key and the full parsed body."""

    public_key: str
    claim: AuthClaim
    body: dict[str, Any]


@dataclass(frozen=True)
class Rejected:
    """Terminal failure; the protected handler must not run."""

    error: WalletAuthError

    @property
    def status_code(self) -> int:
        return self.error.status_code

    @property
    def detail(self) -> str:
        return self.error.detail


AuthResult: TypeAlias = Authorized | Rejected


def parse_envelope(body: Any) -> RequestEnvelope:
    """Validate the structure of a request body.

    Raises:
        MalformedRequest: If a required claim field or the signature is
            missing or has the wrong type.
    """
    if not isinstance(body, dict):
        raise MalformedRequest("Request body must be a JSON object")
    try:
        return RequestEnvelope.model_validate(body)
    except ValidationError as err:
        raise MalformedRequest(str(err)) from err


class AuthGate:
    """Verifies signed request bodies and consumes their nonces."""

    def __init__(self, nonces: NonceService) -> None:
        self._nonces = nonces

    async def authorize(self, body: Any) -> AuthResult:
        """Run the full verification pipeline for a parsed request body.

        Storage failures propagate as ``StorageUnavailable``; every other
        failure is returned as ``Rejected``.
        """
        try:
            envelope = parse_envelope(body)
        except MalformedRequest as err:
            logger.info("Rejected malformed body: %s", err)
            return Rejected(err)

        claim = envelope.data.auth
        stored = await self._nonces.get_nonce(claim.public_key)
        if stored != claim.nonce:
            logger.warning(
                "Nonce mismatch for %s. Expected: %d. Received: %d",
                claim.public_key,
                stored,
                claim.nonce,
            )
            return Rejected(NonceMismatch())

        # Sign the raw mapping so key order and extra fields match the client.
        if not verify_request_signature(body["data"], envelope.signature):
            logger.warning("Invalid signature for %s", claim.public_key)
            return Rejected(SignatureInvalid())

        if not await self._nonces.advance_nonce(claim.public_key, stored):
            return Rejected(NonceMismatch())

        logger.debug("Authorized %s at nonce %d", claim.public_key, stored)
        return Authorized(public_key=claim.public_key, claim=claim, body=body)
