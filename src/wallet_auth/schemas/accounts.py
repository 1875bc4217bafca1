"""Schemas for the username/password variant."""

from pydantic import BaseModel, Field, StrictStr


class CredentialsRequest(BaseModel):
    """Register and login submissions."""

    username: StrictStr = Field(..., min_length=1)
    password: StrictStr


class Account(BaseModel):
    """Stored account record."""

    salt: str
    hash: str


class TokenResponse(BaseModel):
    token: str


class ErrorResponse(BaseModel):
    error: str


class UsernameResponse(BaseModel):
    username: str
