"""Authentication API endpoints for Storefront Core.

These endpoints handle user authentication and return JSON responses:
- Signup and login (token in body and in the auth cookie)
- Current user retrieval
- Logout (clears the cookie)

Error statuses come from the exception handlers in main.py:
409 mobile already registered, 401 invalid credentials or token,
404 token user deleted, 422 invalid body, 500 anything else.
"""

import logging

from flask import Blueprint, g, jsonify

from ..api.validation import validate_request
from ..config import settings
from ..db import get_core
from .cookies import clear_auth_cookie, set_auth_cookie
from .decorators import auth_required
from .schemas import LoginRequest, SignupRequest, UserEnvelope
from .service import AuthService

logger = logging.getLogger(__name__)


# Create blueprint
auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


@auth_bp.post("/signup")
@validate_request
def signup(data: SignupRequest):
    """
    Create a user account and sign it in.

    Example request:
    ```json
    {
        "mobile": "09120000000",
        "name": "Ali",
        "password": "password1"
    }
    ```

    Example response (201, plus Set-Cookie: token=...):
    ```json
    {
        "user": {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "mobile": "09120000000",
            "name": "Ali",
            "role": "user",
            "created_at": "2025-10-19T10:30:00Z"
        },
        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."
    }
    ```
    """
    with get_core(atomic=True) as core:
        result = AuthService.from_settings(core.user).register(
            data.mobile, data.name, data.password, settings.jwt_secret_key
        )

    response = jsonify(result.model_dump(mode="json"))
    set_auth_cookie(response, result.token)
    return response, 201


@auth_bp.post("/login")
@validate_request
def login(data: LoginRequest):
    """
    Authenticate with mobile and password.

    Returns the same body shape as signup with status 200. Unknown mobile
    numbers and wrong passwords both return 401 "Invalid credentials".
    """
    core = get_core()
    result = AuthService.from_settings(core.user).login(
        data.mobile, data.password, settings.jwt_secret_key
    )

    response = jsonify(result.model_dump(mode="json"))
    set_auth_cookie(response, result.token)
    return response, 200


@auth_bp.get("/me")
@auth_required
def me():
    """
    Get the current user.

    Accepts `Authorization: Bearer <token>` or the `token` cookie.

    Example response:
    ```json
    {
        "user": {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "mobile": "09120000000",
            "name": "Ali",
            "role": "user",
            "created_at": "2025-10-19T10:30:00Z"
        }
    }
    ```
    """
    return jsonify(UserEnvelope(user=g.current_user).model_dump(mode="json")), 200


@auth_bp.post("/logout")
def logout():
    """
    Clear the auth cookie.

    Tokens are stateless, so there is nothing to revoke server-side; a
    client holding the token in its own storage should discard it.
    """
    response = jsonify({"message": "Logged out successfully"})
    clear_auth_cookie(response)
    return response, 200
