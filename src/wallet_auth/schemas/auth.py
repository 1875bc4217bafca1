"""Pydantic schemas for wallet-signed requests."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class AuthClaim(BaseModel):
    """The ``auth`` claim embedded in every signed payload."""

    type: StrictStr = Field(..., description="Label shown in the signer's wallet UI")
    nonce: int = Field(..., ge=0, description="Must equal the stored nonce for publicKey")
    chain_id: StrictStr = Field(..., alias="chainId")
    chain_fee_denom: StrictStr = Field(..., alias="chainFeeDenom")
    chain_bech32_prefix: StrictStr = Field(..., alias="chainBech32Prefix")
    public_key: StrictStr = Field(..., alias="publicKey", description="Hex-encoded public key")

    model_config = ConfigDict(strict=True, populate_by_name=True, extra="allow")


class SignedData(BaseModel):
    """Signed payload: the claim plus arbitrary application fields."""

    auth: AuthClaim

    model_config = ConfigDict(extra="allow")


class RequestEnvelope(BaseModel):
    """Body of every protected request."""

    data: SignedData
    signature: StrictStr = Field(..., description="Base64 secp256k1 signature over the sign doc")


class NonceResponse(BaseModel):
    """Current nonce for a public key."""

    nonce: int = Field(..., ge=0)


class PingResponse(BaseModel):
    """Response of the protected ping route."""

    pong: bool = True
    public_key: str = Field(..., alias="publicKey")

    model_config = ConfigDict(populate_by_name=True)
