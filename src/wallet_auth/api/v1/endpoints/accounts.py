"""Username/password endpoints issuing JWT session tokens."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError

from wallet_auth.api.v1.dependencies import AccountServiceDep, CurrentUsernameDep, read_json_body
from wallet_auth.schemas.accounts import (
    CredentialsRequest,
    ErrorResponse,
    TokenResponse,
    UsernameResponse,
)
from wallet_auth.services.accounts import InvalidCredentialsError, UsernameTakenError

router = APIRouter(prefix="/accounts", tags=["accounts"])


async def read_credentials(request: Request) -> CredentialsRequest:
    """Parse username/password, answering 400 rather than 422 on bad input."""
    body = await read_json_body(request)
    try:
        return CredentialsRequest.model_validate(body)
    except ValidationError as err:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Bad request",
        ) from err


CredentialsDep = Annotated[CredentialsRequest, Depends(read_credentials)]


@router.post(
    "/register",
    summary="Register a username and password",
    response_model=TokenResponse | ErrorResponse,
)
async def register(
    credentials: CredentialsDep,
    accounts: AccountServiceDep,
) -> TokenResponse | ErrorResponse:
    """Create an account and return a fresh token."""
    try:
        token = await accounts.register(credentials.username, credentials.password)
    except UsernameTakenError as err:
        return ErrorResponse(error=str(err))
    return TokenResponse(token=token)


@router.post(
    "/login",
    summary="Exchange a username and password for a token",
    response_model=TokenResponse | ErrorResponse,
)
async def login(
    credentials: CredentialsDep,
    accounts: AccountServiceDep,
) -> TokenResponse | ErrorResponse:
    """Authenticate with a password and return a fresh token."""
    try:
        token = await accounts.login(credentials.username, credentials.password)
    except InvalidCredentialsError as err:
        return ErrorResponse(error=str(err))
    return TokenResponse(token=token)


@router.get("/ping", response_model=UsernameResponse)
async def ping(username: CurrentUsernameDep) -> UsernameResponse:
    """Return the username carried by the bearer token."""
    return UsernameResponse(username=username)
