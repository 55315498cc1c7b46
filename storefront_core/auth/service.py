"""Authentication service: signup, login and token identification.

AuthService composes the password hasher, the token service and a
credential store. It knows nothing about HTTP; every failure is raised as
a typed exception from storefront_core.exceptions and the Flask error
handlers turn it into a status code.

The store is any object implementing CredentialStore. In the application
it is db.user.UserOperations bound to the request's connection.
"""

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from ..exceptions import (
    HandleConflict,
    InvalidCredentials,
    Unauthenticated,
    UserCreationFailed,
    UserNotFound,
)
from . import password, token
from .schemas import AuthResponse, UserResponse

logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    """Persistence operations the auth service needs."""

    def find_by_mobile(self, mobile: str) -> Mapping[str, Any] | None: ...

    def find_by_id(self, user_id: str) -> Mapping[str, Any] | None: ...

    def insert(
        self,
        mobile: str,
        name: str,
        password_hash: str | None,
        role: str = "user",
    ) -> Mapping[str, Any] | None: ...


def to_user_response(record: Mapping[str, Any]) -> UserResponse:
    """Build the sanitized user view from a stored record."""
    return UserResponse(
        id=record["id"],
        mobile=record["mobile"],
        name=record["name"],
        role=record["role"],
        created_at=record["created_at"],
    )


def token_claims(record: Mapping[str, Any]) -> dict:
    """Identity claims embedded in an issued token."""
    return {"sub": record["id"], "role": record["role"], "mobile": record["mobile"]}


class AuthService:
    """Signup, login and token identification over a credential store."""

    def __init__(
        self,
        store: CredentialStore,
        iterations: int = password.DEFAULT_ITERATIONS,
        token_ttl_days: int = token.DEFAULT_TTL_DAYS,
    ):
        """
        Args:
            store: Credential store for user lookup and insertion
            iterations: PBKDF2 rounds applied to new passwords
            token_ttl_days: Lifetime of issued tokens
        """
        self._store = store
        self._iterations = iterations
        self._token_ttl_days = token_ttl_days

    @classmethod
    def from_settings(cls, store: CredentialStore) -> "AuthService":
        """Create a service using the configured hashing cost and token lifetime."""
        from ..config import settings

        return cls(
            store,
            iterations=settings.password_hash_iterations,
            token_ttl_days=settings.jwt_expiry_days,
        )

    def _issue(self, record: Mapping[str, Any], secret: str) -> str:
        return token.issue_token(token_claims(record), secret, self._token_ttl_days)

    def register(self, mobile: str, name: str, plaintext_password: str, secret: str) -> AuthResponse:
        """
        Create a user and sign them in.

        Raises:
            HandleConflict: If the mobile number is already registered
            UserCreationFailed: If the store returns no persisted record
        """
        if self._store.find_by_mobile(mobile) is not None:
            logger.warning(f"Signup attempted with registered mobile: {mobile}")
            raise HandleConflict(details={"mobile": mobile})

        password_hash = password.hash_password(plaintext_password, self._iterations)

        # A concurrent signup that slipped past the lookup surfaces here as
        # HandleConflict from the store's uniqueness constraint.
        record = self._store.insert(mobile=mobile, name=name, password_hash=password_hash)
        if record is None:
            logger.error(f"User insert returned no record for mobile: {mobile}")
            raise UserCreationFailed()

        logger.info(f"User registered: {record['id']}")
        return AuthResponse(user=to_user_response(record), token=self._issue(record, secret))

    def login(self, mobile: str, plaintext_password: str, secret: str) -> AuthResponse:
        """
        Verify credentials and issue a token.

        Unknown mobile numbers and wrong passwords raise the same error.

        Raises:
            InvalidCredentials: If the credentials do not match a user
        """
        record = self._store.find_by_mobile(mobile)
        if record is None:
            logger.warning(f"Failed login attempt for mobile: {mobile}")
            raise InvalidCredentials()

        stored_hash = record["password_hash"]
        if not password.verify_password(plaintext_password, stored_hash):
            logger.warning(f"Failed login attempt for mobile: {mobile}")
            raise InvalidCredentials()

        stored_iterations = password.get_iterations(stored_hash)
        if stored_iterations is not None and stored_iterations < self._iterations:
            logger.warning(
                f"User {record['id']} has a password hash with {stored_iterations} "
                f"iterations, below the configured {self._iterations}"
            )

        logger.info(f"Successful login: {record['id']}")
        return AuthResponse(user=to_user_response(record), token=self._issue(record, secret))

    def identify(self, access_token: str | None, secret: str) -> UserResponse:
        """
        Resolve a token to the current user.

        A missing token is treated exactly like an invalid one.

        Raises:
            Unauthenticated: If the token is missing, invalid or expired
            UserNotFound: If the token's subject no longer exists
        """
        payload = token.verify_token(access_token, secret)
        if payload is None:
            logger.warning("Token rejected")
            raise Unauthenticated()

        record = self._store.find_by_id(payload.sub)
        if record is None:
            logger.warning(f"Valid token for missing user: {payload.sub}")
            raise UserNotFound(details={"user_id": payload.sub})

        return to_user_response(record)
