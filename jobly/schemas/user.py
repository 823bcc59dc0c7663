"""
Pydantic schemas for user registration, profile and updates.
"""

from pydantic import BaseModel, EmailStr, Field, ConfigDict
from typing import Optional


class UserRegisterRequest(BaseModel):
    """Request schema for user registration."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
    )
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=30)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=30)
    email: EmailStr


class UserUpdateRequest(BaseModel):
    """Partial user update; username is the key and can't be changed."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    first_name: str = Field(None, alias="firstName", min_length=1, max_length=30)
    last_name: str = Field(None, alias="lastName", min_length=1, max_length=30)
    password: str = Field(None, min_length=5, max_length=72)
    email: EmailStr = None
    is_admin: bool = Field(None, alias="isAdmin")


class UserResponse(BaseModel):
    """User profile response (no password)."""
    model_config = ConfigDict(populate_by_name=True)

    username: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    is_admin: bool = Field(False, alias="isAdmin")


class UserEnvelope(BaseModel):
    user: UserResponse
