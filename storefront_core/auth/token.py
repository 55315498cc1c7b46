"""
JWT Token Service.

Issues and verifies HS256-signed identity tokens with PyJWT.

Claims:
- sub: user id
- role: user role
- mobile: user mobile number
- iat: issued-at (unix seconds)
- exp: expiry (unix seconds), iat + ttl_days

Tokens are signed, not encrypted: any holder can read the claims, so
nothing secret belongs in them. Verification never raises; every failure
(bad signature, malformed token, missing claims, expiry, wrong secret)
returns None and callers treat that uniformly as unauthenticated.
"""

import logging
from collections.abc import Mapping
from typing import Any

import jwt
from pydantic import ValidationError

from ..utils import isodatetime
from .schemas import TokenPayload

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEFAULT_TTL_DAYS = 30
SECONDS_PER_DAY = 24 * 60 * 60
REQUIRED_CLAIMS = ["sub", "iat", "exp"]


def issue_token(claims: Mapping[str, Any], secret: str, ttl_days: int = DEFAULT_TTL_DAYS) -> str:
    """
    Sign a token carrying the given claims plus iat and exp.

    Args:
        claims: Identity claims (sub, role, mobile); iat/exp are overwritten
        secret: HMAC signing secret
        ttl_days: Days until expiry; 0 yields a token that is already expired

    Returns:
        Encoded JWT string
    """
    issued_at = isodatetime.now_unix()
    payload = {
        **claims,
        "iat": issued_at,
        "exp": issued_at + ttl_days * SECONDS_PER_DAY,
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def verify_token(token: str | None, secret: str) -> TokenPayload | None:
    """
    Verify signature and expiry and return the claims.

    Args:
        token: Encoded JWT string
        secret: HMAC secret the token must have been signed with

    Returns:
        TokenPayload if the token is valid, otherwise None
    """
    if not token:
        return None

    try:
        decoded = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError:
        logger.debug("Token rejected: expired")
        return None
    except jwt.PyJWTError as e:
        logger.debug(f"Token rejected: {e}")
        return None

    try:
        payload = TokenPayload.model_validate(decoded)
    except ValidationError as e:
        logger.debug(f"Token rejected: unexpected claims ({e.error_count()} errors)")
        return None

    # exp is exclusive: a token is dead from its exp second onwards
    if payload.exp <= isodatetime.now_unix():
        logger.debug("Token rejected: expired")
        return None

    return payload

