"""Nonce lookup endpoint consumed by clients before signing."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from wallet_auth.api.v1.dependencies import NonceServiceDep
from wallet_auth.schemas.auth import NonceResponse

router = APIRouter(prefix="/nonce", tags=["nonce"])


@router.get("", include_in_schema=False)
@router.get("/", include_in_schema=False)
async def missing_public_key() -> None:
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Missing publicKey",
    )


@router.get(
    "/{public_key}",
    summary="Get the current nonce for a public key",
    response_model=NonceResponse,
)
async def read_nonce(public_key: str, nonces: NonceServiceDep) -> NonceResponse:
    """Return the nonce the next signed request for ``public_key`` must carry.

    The nonce is not secret; only its single use matters, so this route is
    unauthenticated.
    """
    if not public_key.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing publicKey",
        )
    return NonceResponse(nonce=await nonces.get_nonce(public_key))
