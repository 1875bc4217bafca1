"""Signature utilities built on secp256k1 primitives.

Wallets in the Cosmos ecosystem identify accounts by a bech32 address derived
from a compressed secp256k1 public key and sign the SHA-256 digest of a
serialized sign document. Signatures travel as base64 of the fixed-length
64-byte ``r || s`` encoding.
"""
from __future__ import annotations

import base64
import binascii
import hashlib

from bech32 import bech32_encode, convertbits
from Crypto.Hash import RIPEMD160
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature

from wallet_auth.core.errors import InvalidPublicKey

COMPRESSED_PUBKEY_LENGTH = 33
SIGNATURE_LENGTH = 64
SCALAR_LENGTH = 32


def decode_public_key(pubkey_hex: str) -> ec.EllipticCurvePublicKey:
    """Decode a hex-encoded compressed secp256k1 public key.

    Raises:
        InvalidPublicKey: If the hex is malformed, the key is not 33 bytes, or
            the bytes do not describe a point on the curve.
    """
    try:
        raw = binascii.unhexlify(pubkey_hex)
    except (TypeError, ValueError) as err:
        raise InvalidPublicKey(f"Invalid hex encoding: {err}") from err
    if len(raw) != COMPRESSED_PUBKEY_LENGTH:
        raise InvalidPublicKey("secp256k1 public keys must be 33 bytes (compressed)")
    try:
        return ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), raw)
    except ValueError as err:
        raise InvalidPublicKey(f"Invalid secp256k1 point: {err}") from err


def raw_address(pubkey_bytes: bytes) -> bytes:
    """Return RIPEMD160(SHA256(pubkey)), the 20-byte account address."""
    return RIPEMD160.new(hashlib.sha256(pubkey_bytes).digest()).digest()


def derive_address(pubkey_hex: str, bech32_prefix: str) -> str:
    """Derive the bech32 wallet address for a public key under a chain prefix.

    Args:
        pubkey_hex: Hex-encoded compressed secp256k1 public key.
        bech32_prefix: Human-readable part of the address (e.g. ``juno``).

    Returns:
        The bech32-encoded address string.

    Raises:
        InvalidPublicKey: If the public key cannot be decoded.
    """
    decode_public_key(pubkey_hex)
    words = convertbits(raw_address(binascii.unhexlify(pubkey_hex)), 8, 5)
    if words is None:  # pragma: no cover - 8-to-5 bit conversion always pads
        raise InvalidPublicKey("Could not convert address bytes to bech32 words")
    return bech32_encode(bech32_prefix, words)


def verify_signature(pubkey_hex: str, message: bytes, signature_b64: str) -> bool:
    """Verify a secp256k1 ECDSA signature over SHA-256 of ``message``.

    Args:
        pubkey_hex: Hex-encoded compressed public key.
        message: Exact bytes that were signed on the client.
        signature_b64: Base64 of the 64-byte ``r || s`` signature.

    Returns:
        True if the signature is valid for `message` under `pubkey_hex`; False otherwise.
    """
    try:
        public_key = decode_public_key(pubkey_hex)
        signature = base64.b64decode(signature_b64, validate=True)
        if len(signature) != SIGNATURE_LENGTH:
            return False
        r = int.from_bytes(signature[:SCALAR_LENGTH], "big")
        s = int.from_bytes(signature[SCALAR_LENGTH:], "big")
        public_key.verify(
            encode_dss_signature(r, s),
            message,
            ec.ECDSA(hashes.SHA256()),
        )
        return True
    except Exception:
        return False
