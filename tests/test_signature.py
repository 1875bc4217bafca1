"""Tests for secp256k1 address derivation and signature checks."""

import base64
import json

import pytest

from tests.wallet_vectors import WALLET_ADDRESS, WALLET_PUBLIC_KEY, WALLET_REQUEST_BODY, WALLET_SIGN_MESSAGE
from wallet_auth.core.errors import InvalidPublicKey, SignatureInvalid
from wallet_auth.core.security import decode_public_key, derive_address, verify_signature
from wallet_auth.utils.signer import WalletSigner

# secp256k1 generator point G, compressed; its private key is 1
GENERATOR_PUBKEY_HEX = "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"


def test_verify_signature_rejects_bad_inputs() -> None:
    """Ensure verify_signature returns False when given invalid inputs."""
    assert verify_signature("zz", b"msg", "aa") is False
    assert verify_signature(GENERATOR_PUBKEY_HEX, b"msg", "not base64!") is False
    assert verify_signature(GENERATOR_PUBKEY_HEX, b"msg", base64.b64encode(b"\x01" * 10).decode()) is False
    assert verify_signature(GENERATOR_PUBKEY_HEX, b"msg", base64.b64encode(b"\x00" * 64).decode()) is False


def test_verify_signature_accepts_valid_signature() -> None:
    signer = WalletSigner.generate()
    signature = signer.sign_bytes(b"hello wallet")

    assert verify_signature(signer.public_key_hex, b"hello wallet", signature) is True


def test_verify_signature_rejects_other_message_and_key() -> None:
    signer = WalletSigner.generate()
    other = WalletSigner.generate()
    signature = signer.sign_bytes(b"hello wallet")

    assert verify_signature(signer.public_key_hex, b"hello wallet!", signature) is False
    assert verify_signature(other.public_key_hex, b"hello wallet", signature) is False


def test_verify_signature_rejects_flipped_byte() -> None:
    signer = WalletSigner.generate()
    raw = bytearray(base64.b64decode(signer.sign_bytes(b"payload")))
    raw[10] ^= 0x01

    assert verify_signature(signer.public_key_hex, b"payload", base64.b64encode(raw).decode()) is False


def test_signatures_are_low_s() -> None:
    signer = WalletSigner.generate()
    order = int("FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141", 16)

    for index in range(5):
        raw = base64.b64decode(signer.sign_bytes(f"message {index}".encode()))
        assert int.from_bytes(raw[32:], "big") <= order // 2


class TestDecodePublicKey:
    """Tests for public key decoding."""

    def test_accepts_compressed_point(self) -> None:
        key = decode_public_key(GENERATOR_PUBKEY_HEX)
        assert key.public_numbers().x == int(GENERATOR_PUBKEY_HEX[2:], 16)

    def test_rejects_non_hex(self) -> None:
        with pytest.raises(InvalidPublicKey, match="Invalid hex encoding"):
            decode_public_key("abc123xyz")

    def test_rejects_wrong_length(self) -> None:
        with pytest.raises(InvalidPublicKey, match="33 bytes"):
            decode_public_key("abc123")

    def test_rejects_point_off_curve(self) -> None:
        # x = 5 has no matching y on secp256k1
        with pytest.raises(InvalidPublicKey, match="Invalid secp256k1 point"):
            decode_public_key("02" + "00" * 31 + "05")

    def test_invalid_public_key_is_a_signature_failure(self) -> None:
        assert issubclass(InvalidPublicKey, SignatureInvalid)


class TestDeriveAddress:
    """Tests for bech32 address derivation."""

    def test_known_address_for_generator_point(self) -> None:
        # hash160(G) is 751e76e8...3bd6, the payload of bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4
        address = derive_address(GENERATOR_PUBKEY_HEX, "cosmos")

        assert address.startswith("cosmos1w508d6qejxtdg4y5r3zarvary0c5xw7k")
        assert len(address) == len("cosmos1") + 32 + 6

    def test_prefix_changes_address(self) -> None:
        signer = WalletSigner.generate()
        juno = derive_address(signer.public_key_hex, "juno")
        stars = derive_address(signer.public_key_hex, "stars")

        assert juno.startswith("juno1")
        assert stars.startswith("stars1")
        # Same 20-byte payload, so the data part differs only by checksum.
        assert juno[5:-6] == stars[6:-6]

    def test_invalid_key_raises(self) -> None:
        with pytest.raises(InvalidPublicKey):
            derive_address("abc123", "juno")


class TestWalletSignature:
    """A signature made by a JavaScript wallet client over known bytes."""

    def test_fixed_key_matches_client(self) -> None:
        signer = WalletSigner.from_hex("01" * 32)

        assert signer.public_key_hex == WALLET_PUBLIC_KEY
        assert signer.address("juno") == WALLET_ADDRESS

    def test_client_signature_verifies(self) -> None:
        signature = json.loads(WALLET_REQUEST_BODY)["signature"]

        assert verify_signature(WALLET_PUBLIC_KEY, WALLET_SIGN_MESSAGE.encode("utf-8"), signature) is True

    def test_client_signature_rejects_other_bytes(self) -> None:
        signature = json.loads(WALLET_REQUEST_BODY)["signature"]
        altered = WALLET_SIGN_MESSAGE.replace("0.00001", "0.00002").encode("utf-8")

        assert verify_signature(WALLET_PUBLIC_KEY, altered, signature) is False
