"""Authentication Pydantic schemas for API validation."""

from .auth import (
    AuthResponse,
    LoginRequest,
    Role,
    SignupRequest,
    TokenPayload,
    UserEnvelope,
    UserResponse,
)

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "Role",
    "SignupRequest",
    "TokenPayload",
    "UserEnvelope",
    "UserResponse",
]
