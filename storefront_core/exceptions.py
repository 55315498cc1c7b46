"""Exception hierarchy for Storefront Core.

Every error raised inside the core derives from StorefrontError. The
Flask error handlers in main.py map each category to a status code:

- ResourceNotFound    -> 404
- ValidationError     -> 422
- AuthenticationError -> 401
- ConflictError       -> 409
- everything else     -> 500
"""


class StorefrontError(Exception):
    """Base exception carrying a user-safe message and optional details."""

    default_message = "An error occurred"

    def __init__(self, message: str | None = None, details: dict | None = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)


class ResourceNotFound(StorefrontError):
    default_message = "Resource not found"


class ValidationError(StorefrontError):
    default_message = "Invalid request data"


class AuthenticationError(StorefrontError):
    default_message = "Authentication required"


class ConflictError(StorefrontError):
    default_message = "Resource already exists"


class DatabaseError(StorefrontError):
    default_message = "Database operation failed"


class InternalError(StorefrontError):
    default_message = "An internal error occurred"


# ============================================================================
# Authentication failures
# ============================================================================


class HandleConflict(ConflictError):
    """Signup with a mobile number that is already registered."""

    default_message = "Mobile number is already registered"


class UserCreationFailed(DatabaseError):
    """The store accepted the insert but returned no persisted record."""

    default_message = "Failed to create user"


class InvalidCredentials(AuthenticationError):
    """Unknown mobile number or wrong password (deliberately indistinguishable)."""

    default_message = "Invalid credentials"


class Unauthenticated(AuthenticationError):
    """Missing, malformed, forged or expired token."""

    default_message = "Unauthorized"


class UserNotFound(ResourceNotFound):
    """Token is valid but its subject no longer exists."""

    default_message = "User not found"
