"""Shared API dependencies for storage access and request authentication."""

import json
from typing import Annotated, Any

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from wallet_auth.core.settings import Settings
from wallet_auth.services.accounts import AccountService, InvalidTokenError, TokenExpiredError
from wallet_auth.services.auth_gate import AuthGate, Authorized, Rejected
from wallet_auth.services.nonces import NonceService
from wallet_auth.storage import Storage

# HTTP Bearer scheme for the password/JWT variant; missing headers are handled below
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """Return the settings the running app was built with."""
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    """Return the storage opened for the running app."""
    return request.app.state.storage


SettingsDep = Annotated[Settings, Depends(get_settings)]
StorageDep = Annotated[Storage, Depends(get_storage)]


def get_nonce_service(storage: StorageDep) -> NonceService:
    return NonceService(storage.nonces)


NonceServiceDep = Annotated[NonceService, Depends(get_nonce_service)]


def get_auth_gate(nonces: NonceServiceDep) -> AuthGate:
    return AuthGate(nonces)


AuthGateDep = Annotated[AuthGate, Depends(get_auth_gate)]


def get_account_service(storage: StorageDep, settings: SettingsDep) -> AccountService:
    return AccountService(storage.accounts, settings)


AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]


async def read_json_body(request: Request) -> Any:
    """Return the decoded JSON body, or None when it is not valid JSON."""
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


async def require_signed_request(request: Request, gate: AuthGateDep) -> Authorized:
    """Authenticate a wallet-signed request body.

    On success the verified public key and the parsed body are also attached
    to ``request.state`` for later middleware and handlers.

    Raises:
        HTTPException: 400 for a malformed body, 401 for a nonce or signature
            failure.
    """
    result = await gate.authorize(await read_json_body(request))
    if isinstance(result, Rejected):
        raise HTTPException(status_code=result.status_code, detail=result.detail)

    request.state.public_key = result.public_key
    request.state.parsed_body = result.body
    return result


# Type alias for routes protected by a wallet signature
AuthorizedDep = Annotated[Authorized, Depends(require_signed_request)]


async def get_authorized_username(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    accounts: AccountServiceDep,
) -> str:
    """Get the username from a bearer token issued by the account routes.

    Raises:
        HTTPException: 401 if the header is missing, the token expired, or it
            fails verification.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    try:
        return await accounts.verify_token(credentials.credentials)
    except TokenExpiredError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization expired",
        ) from err
    except InvalidTokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(err),
        ) from err


CurrentUsernameDep = Annotated[str, Depends(get_authorized_username)]
