"""Protected liveness route for checking a wallet signature end to end."""

from fastapi import APIRouter

from wallet_auth.api.v1.dependencies import AuthorizedDep
from wallet_auth.schemas.auth import PingResponse

router = APIRouter(tags=["ping"])


@router.post("/ping", response_model=PingResponse)
async def ping(auth: AuthorizedDep) -> PingResponse:
    """Echo the verified public key of a signed request."""
    return PingResponse(pong=True, public_key=auth.public_key)
