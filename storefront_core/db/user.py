"""User credential operations.

IMPORT CONVENTION:
- Core accesses these through core.user property
- NO direct import needed when using Core API

UserOperations is the SQLite implementation of the credential store
consumed by auth.service.AuthService. Mobile uniqueness is enforced by the
UNIQUE constraint on users.mobile, so two concurrent signups for the same
number resolve to one insert and one HandleConflict.
"""

import logging
import sqlite3

from ..exceptions import HandleConflict
from ..utils import isodatetime, uid

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"


class UserOperations:
    """Lookup and insertion of user credential records."""

    def __init__(self, conn: sqlite3.Connection):
        """Initialize user operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def find_by_mobile(self, mobile: str) -> sqlite3.Row | None:
        """Get user row by mobile number, or None."""
        return self._conn.execute(
            "SELECT * FROM users WHERE mobile = ?",
            (mobile,)
        ).fetchone()

    def find_by_id(self, user_id: str) -> sqlite3.Row | None:
        """Get user row by id, or None."""
        return self._conn.execute(
            "SELECT * FROM users WHERE id = ?",
            (user_id,)
        ).fetchone()

    def insert(
        self,
        mobile: str,
        name: str,
        password_hash: str | None,
        role: str = DEFAULT_ROLE
    ) -> sqlite3.Row | None:
        """Insert a user with auto-generated id and creation timestamp.

        Args:
            mobile: Unique mobile number
            name: Display name
            password_hash: PBKDF2 artifact string, or None
            role: 'user' or 'customer'

        Returns:
            The persisted row as read back from the table, or None if it
            could not be read back.

        Raises:
            HandleConflict: If the mobile number is already registered
            sqlite3.IntegrityError: For any other constraint violation
        """
        user_id = uid.generate_uuid()
        try:
            self._conn.execute(
                """INSERT INTO users (id, mobile, name, password_hash, role, created_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (user_id, mobile, name, password_hash, role, isodatetime.now())
            )
        except sqlite3.IntegrityError as e:
            if "users.mobile" in str(e):
                logger.warning(f"Insert rejected, mobile already registered: {mobile}")
                raise HandleConflict(details={"mobile": mobile}) from e
            raise

        return self.find_by_id(user_id)

    def delete(self, user_id: str) -> bool:
        """Delete a user by id.

        Returns:
            True if a row was removed
        """
        cursor = self._conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
        return cursor.rowcount > 0
