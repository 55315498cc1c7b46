"""Auth cookie transport.

Signup and login set the issued token in an HTTP-only cookie so browser
clients authenticate without handling the token themselves.
"""

from flask import Response

from ..config import settings
from .token import SECONDS_PER_DAY

AUTH_COOKIE_NAME = "token"


def set_auth_cookie(response: Response, access_token: str) -> Response:
    """Attach the token cookie (HttpOnly, SameSite=Lax, Path=/)."""
    response.set_cookie(
        AUTH_COOKIE_NAME,
        access_token,
        max_age=settings.jwt_expiry_days * SECONDS_PER_DAY,
        path="/",
        secure=settings.auth_cookie_secure,
        httponly=True,
        samesite="Lax",
    )
    return response


def clear_auth_cookie(response: Response) -> Response:
    """Expire the token cookie on the client."""
    response.delete_cookie(
        AUTH_COOKIE_NAME,
        path="/",
        secure=settings.auth_cookie_secure,
        httponly=True,
        samesite="Lax",
    )
    return response
