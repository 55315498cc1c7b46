"""Password hashing and verification.

Passwords are stored as self-describing PBKDF2 artifact strings:

    pbkdf2$sha256$<iterations>$<salt>$<hash>

salt and hash are URL-safe base64 without padding. Every artifact records
its own iteration count, so the cost used for new passwords can be raised
without invalidating hashes that are already stored.
"""

import base64
import binascii
import hashlib
import hmac
import secrets

ALGORITHM = "pbkdf2"
HASH_NAME = "sha256"
SEPARATOR = "$"

DEFAULT_ITERATIONS = 150_000
SALT_BYTES = 16
KEY_BYTES = 32


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64url_decode(value: str) -> bytes:
    padding = -len(value) % 4
    return base64.urlsafe_b64decode(value + "=" * padding)


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac(
        HASH_NAME, password.encode("utf-8"), salt, iterations, dklen=KEY_BYTES
    )


def hash_password(password: str, iterations: int = DEFAULT_ITERATIONS) -> str:
    """Hash a password with a fresh random salt.

    Args:
        password: Plaintext password
        iterations: PBKDF2 round count, must be at least 1

    Returns:
        Artifact string in pbkdf2$sha256$<iterations>$<salt>$<hash> format

    Raises:
        ValueError: If iterations is less than 1
    """
    if iterations < 1:
        raise ValueError("iterations must be at least 1")

    salt = secrets.token_bytes(SALT_BYTES)
    derived = _derive(password, salt, iterations)
    return SEPARATOR.join(
        [ALGORITHM, HASH_NAME, str(iterations), _b64url_encode(salt), _b64url_encode(derived)]
    )


def verify_password(password: str, stored: str | None) -> bool:
    """Check a plaintext password against a stored artifact string.

    Fails closed: a missing or malformed artifact (wrong field count,
    unknown algorithm or hash tag, non-numeric iteration count, bad
    base64) or a plaintext that cannot be UTF-8 encoded returns False
    and never raises.

    The derived key is compared in constant time; a length mismatch is
    reported as a plain False.
    """
    if not isinstance(stored, str) or not isinstance(password, str):
        return False

    parts = stored.split(SEPARATOR)
    if len(parts) != 5 or parts[0] != ALGORITHM or parts[1] != HASH_NAME:
        return False

    iterations_str, salt_str, hash_str = parts[2], parts[3], parts[4]
    if not (iterations_str.isascii() and iterations_str.isdigit()):
        return False
    iterations = int(iterations_str)
    if iterations < 1:
        return False

    try:
        salt = _b64url_decode(salt_str)
        expected = _b64url_decode(hash_str)
    except (binascii.Error, ValueError):
        return False

    try:
        candidate = _derive(password, salt, iterations)
    except UnicodeEncodeError:
        # Lone surrogates have no UTF-8 form
        return False
    if len(candidate) != len(expected):
        return False
    return hmac.compare_digest(candidate, expected)


def get_iterations(stored: str | None) -> int | None:
    """Return the iteration count recorded in an artifact, or None if malformed."""
    if not isinstance(stored, str):
        return None
    parts = stored.split(SEPARATOR)
    if len(parts) != 5 or not (parts[2].isascii() and parts[2].isdigit()):
        return None
    return int(parts[2])
