"""Authentication module for Storefront Core.

This module provides authentication functionality:
- Password hashing and verification (PBKDF2-SHA256)
- JWT token issuance and verification
- Signup, login and identification service
- Token extraction and the @auth_required decorator

Auth endpoints:
- POST /auth/signup - Create account, return token and set cookie
- POST /auth/login - Authenticate, return token and set cookie
- GET /auth/me - Get current user info
- POST /auth/logout - Clear the auth cookie
"""

from . import password, schemas, token

__all__ = ["password", "schemas", "token"]
