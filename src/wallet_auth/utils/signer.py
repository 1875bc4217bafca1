"""Client-side signing utilities for wallet-authenticated requests.

This module mirrors what a browser wallet does when it signs a request
payload, so scripts and tests can produce envelopes that the auth gate
accepts. The signatures are low-S normalized, the form Cosmos wallets emit.
"""

from __future__ import annotations

import base64
from collections.abc import Mapping
from typing import Any, Final

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature

from wallet_auth.core.security import SCALAR_LENGTH, derive_address
from wallet_auth.services.sign_doc import build_sign_message

# Order of the secp256k1 group
SECP256K1_ORDER: Final[int] = int(
    "FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141",
    16,
)
DEFAULT_SIGN_TYPE: Final[str] = "Verify"


class WalletSigner:
    """A secp256k1 key pair that signs request payloads like a wallet."""

    def __init__(self, private_key: ec.EllipticCurvePrivateKey) -> None:
        if not isinstance(private_key.curve, ec.SECP256K1):
            raise ValueError("WalletSigner requires a secp256k1 private key")
        self._private_key = private_key

    @classmethod
    def generate(cls) -> WalletSigner:
        """Create a signer with a fresh random key."""
        return cls(ec.generate_private_key(ec.SECP256K1()))

    @classmethod
    def from_hex(cls, private_key_hex: str) -> WalletSigner:
        """Load a signer from a hex-encoded 32-byte private scalar.

        Raises:
            ValueError: If the hex is malformed or the scalar is out of range.
        """
        try:
            secret = int(private_key_hex, 16)
        except ValueError as err:
            raise ValueError(f"Invalid private key hex: {err}") from err
        return cls(ec.derive_private_key(secret, ec.SECP256K1()))

    @property
    def public_key_hex(self) -> str:
        """Hex of the 33-byte compressed public key."""
        return (
            self._private_key.public_key()
            .public_bytes(
                encoding=serialization.Encoding.X962,
                format=serialization.PublicFormat.CompressedPoint,
            )
            .hex()
        )

    def address(self, bech32_prefix: str) -> str:
        """Return this key's bech32 address under ``bech32_prefix``."""
        return derive_address(self.public_key_hex, bech32_prefix)

    def sign_bytes(self, message: bytes) -> str:
        """Sign ``message`` and return base64 of the 64-byte ``r || s`` form."""
        der = self._private_key.sign(message, ec.ECDSA(hashes.SHA256()))
        r, s = decode_dss_signature(der)
        if s > SECP256K1_ORDER // 2:
            s = SECP256K1_ORDER - s
        raw = r.to_bytes(SCALAR_LENGTH, "big") + s.to_bytes(SCALAR_LENGTH, "big")
        return base64.b64encode(raw).decode()

    def build_auth(
        self,
        *,
        nonce: int,
        chain_id: str,
        chain_fee_denom: str,
        chain_bech32_prefix: str,
        sign_type: str = DEFAULT_SIGN_TYPE,
    ) -> dict[str, Any]:
        """Build the ``auth`` claim for this key."""
        return {
            "type": sign_type,
            "nonce": nonce,
            "chainId": chain_id,
            "chainFeeDenom": chain_fee_denom,
            "chainBech32Prefix": chain_bech32_prefix,
            "publicKey": self.public_key_hex,
        }

    def sign_request(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Return the request envelope ``{"data": ..., "signature": ...}``.

        ``data`` must already contain the ``auth`` claim.
        """
        payload = dict(data)
        return {
            "data": payload,
            "signature": self.sign_bytes(build_sign_message(payload)),
        }
