"""Authentication schemas."""
from typing import Optional

from pydantic import Field

from .common import BaseSchema


class RegisterRequest(BaseSchema):
    """Registration request schema. Field rules are enforced by the auth service."""

    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")


class LoginRequest(BaseSchema):
    """Login request schema."""

    email: Optional[str] = Field(None, description="User email")
    password: Optional[str] = Field(None, description="User password")


class TokenResponse(BaseSchema):
    """Token response schema."""

    token: str = Field(..., description="JWT bearer token, sent back in x-auth-token")
    msg: str = Field(..., description="Outcome message")
