"""Pydantic schemas for signup, login, user views and token claims."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

Role = Literal["customer", "user"]

MOBILE_LENGTH = 11


# ============================================================================
# Request Schemas
# ============================================================================


class LoginRequest(BaseModel):
    """Credentials for POST /auth/login."""

    mobile: str = Field(
        ...,
        min_length=MOBILE_LENGTH,
        max_length=MOBILE_LENGTH,
        description="Mobile number used as the login handle"
    )
    password: str = Field(..., min_length=8, description="Plaintext password")


class SignupRequest(LoginRequest):
    """Registration data for POST /auth/signup."""

    name: str = Field(..., min_length=3, description="Display name")


# ============================================================================
# Response Schemas
# ============================================================================


class UserResponse(BaseModel):
    """Sanitized user view. Never carries the password hash."""

    id: str
    mobile: str
    name: str
    role: Role
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    """Result of a successful signup or login."""

    user: UserResponse
    token: str


class UserEnvelope(BaseModel):
    """Body of GET /auth/me."""

    user: UserResponse


# ============================================================================
# Token Claims
# ============================================================================


class TokenPayload(BaseModel):
    """Verified identity token claims (iat/exp are unix seconds)."""

    sub: str
    role: Role
    mobile: str
    iat: int
    exp: int
