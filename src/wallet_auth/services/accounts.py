"""Username/password accounts with JWT session tokens.

This is the simpler alternative to wallet signatures: salted SHA-256
password hashes stored in the account namespace, and short-lived HS256 tokens
signed with a secret that is generated on first use and kept in the same
store.
"""

from __future__ import annotations

import base64
import hashlib
import json
import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any, Final

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError

from wallet_auth.core.settings import Settings
from wallet_auth.schemas.accounts import Account
from wallet_auth.storage.base import KeyValueStore

logger = logging.getLogger(__name__)

ACCOUNT_KEY_PREFIX: Final[str] = "account:"
JWK_KEY: Final[str] = "jwk-key"
SALT_BYTES: Final[int] = 64
SECRET_BYTES: Final[int] = 32


class UsernameTakenError(ValueError):
    """Raised when registering a username that already exists."""


class InvalidCredentialsError(ValueError):
    """Raised when a login does not match a stored account."""


class TokenExpiredError(ValueError):
    """Raised when a presented token is past its expiry."""


class InvalidTokenError(ValueError):
    """Raised when a presented token cannot be verified."""


def compute_hash_with_salt(password: str, salt: str) -> str:
    """Return the hex SHA-256 digest of ``password + salt``."""
    return hashlib.sha256(f"{password}{salt}".encode()).hexdigest()


def _encode_b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode().rstrip("=")


class AccountService:
    """Registers accounts, checks passwords, and issues/verifies tokens."""

    def __init__(self, store: KeyValueStore, settings: Settings) -> None:
        self._store = store
        self._settings = settings

    async def get_account(self, username: str) -> Account | None:
        raw = await self._store.get(ACCOUNT_KEY_PREFIX + username)
        if raw is None:
            return None
        return Account.model_validate_json(raw)

    async def register(self, username: str, password: str) -> str:
        """Create an account and return a token for it.

        Raises:
            UsernameTakenError: If the username already exists.
        """
        salt = secrets.token_hex(SALT_BYTES)
        account = Account(salt=salt, hash=compute_hash_with_salt(password, salt))
        created = await self._store.compare_and_swap(
            ACCOUNT_KEY_PREFIX + username,
            None,
            account.model_dump_json(),
        )
        if not created:
            raise UsernameTakenError("Username taken.")
        logger.info("Registered account %s", username)
        return await self.create_token(username)

    async def login(self, username: str, password: str) -> str:
        """Return a token if the password matches the stored account.

        Raises:
            InvalidCredentialsError: If the account is unknown or the password is wrong.
        """
        account = await self.get_account(username)
        if account is None:
            raise InvalidCredentialsError("Invalid credentials.")
        candidate = compute_hash_with_salt(password, account.salt)
        if not secrets.compare_digest(candidate, account.hash):
            raise InvalidCredentialsError("Invalid credentials.")
        return await self.create_token(username)

    async def get_signing_key(self) -> dict[str, Any]:
        """Return the token signing JWK, creating and storing it on first use."""
        raw = await self._store.get(JWK_KEY)
        if raw is not None:
            return json.loads(raw)

        jwk = {
            "kty": "oct",
            "alg": self._settings.jwt_algorithm,
            "k": _encode_b64(secrets.token_bytes(SECRET_BYTES)),
        }
        if await self._store.compare_and_swap(JWK_KEY, None, json.dumps(jwk)):
            logger.info("Generated new token signing key")
            return jwk

        # Another request stored a key first; use that one.
        raw = await self._store.get(JWK_KEY)
        if raw is None:  # pragma: no cover - store lost the winning write
            raise RuntimeError("Token signing key disappeared from storage")
        return json.loads(raw)

    async def create_token(self, username: str) -> str:
        """Sign a token carrying ``username``."""
        now = datetime.now(UTC)
        claims: dict[str, object] = {
            "username": username,
            "iat": now,
            "exp": now + timedelta(seconds=self._settings.access_token_expire_seconds),
        }
        encoded: str = jwt.encode(
            claims,
            await self.get_signing_key(),
            algorithm=self._settings.jwt_algorithm,
        )
        return encoded

    async def verify_token(self, token: str) -> str:
        """Return the username carried by a valid token.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is otherwise invalid.
        """
        try:
            payload = jwt.decode(
                token,
                await self.get_signing_key(),
                algorithms=[self._settings.jwt_algorithm],
            )
        except ExpiredSignatureError as err:
            raise TokenExpiredError("Authorization expired") from err
        except JWTError as err:
            raise InvalidTokenError(str(err)) from err

        username = payload.get("username")
        if not isinstance(username, str):
            raise InvalidTokenError("Invalid token.")
        return username
