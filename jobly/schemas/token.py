"""
Pydantic schemas for authentication requests and verified token claims.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class IdentityClaims(BaseModel):
    """
    Verified identity carried by a bearer token.

    Only produced by security.decode_token and never mutated afterwards.
    """
    model_config = ConfigDict(frozen=True)

    subject: str
    is_admin: bool = False
    issued_at: datetime


class TokenRequest(BaseModel):
    """Request schema for POST /auth/token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    token: str
