"""Authentication decorators for protected endpoints.

- @auth_required - Requires a valid token whose user still exists

The token is read from the Authorization header first (Bearer scheme)
and from the auth cookie second. A request with neither is rejected the
same way as a request with an invalid token.
"""

import logging
from functools import wraps

from flask import g, request

from ..config import settings
from ..db import get_core
from ..exceptions import Unauthenticated
from .cookies import AUTH_COOKIE_NAME
from .service import AuthService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_request_token() -> str | None:
    """
    Return the request's token, or None.

    First match wins: a non-empty Bearer header is used even if the
    cookie also carries a token.
    """
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith(BEARER_PREFIX):
        header_token = auth_header[len(BEARER_PREFIX):].strip()
        if header_token:
            return header_token

    return request.cookies.get(AUTH_COOKIE_NAME) or None


def _authenticate_request():
    """
    Resolve the request's token to a user and store it in flask.g.

    Stores:
    - g.current_user: UserResponse for the authenticated user

    Raises:
        Unauthenticated: If no valid token is provided
        UserNotFound: If the token's user has been deleted
    """
    access_token = extract_request_token()
    if access_token is None:
        logger.warning("Unauthenticated request to protected endpoint")
        raise Unauthenticated()

    core = get_core()
    service = AuthService.from_settings(core.user)
    g.current_user = service.identify(access_token, settings.jwt_secret_key)

    logger.debug(f"Authenticated request for user {g.current_user.id}")


def auth_required(f):
    """
    Decorator to require authentication for endpoint access.

    Example:
    ```python
    @auth_required
    def protected_endpoint():
        user = g.current_user
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        _authenticate_request()
        return f(*args, **kwargs)

    return wrapper
