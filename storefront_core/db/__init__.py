"""Database module for Storefront Core.

This module provides the Core API for database operations.
Core encapsulates connection management and provides access to entity operations.

ARCHITECTURE:
- Core owns its connection (no Flask g.db dependency)
- Connection closes on context exit (atomic=True) or when Core is collected
- Each aggregate gets an encapsulated operations class

    core = get_core()
    row = core.user.find_by_mobile("09120000000")

    with get_core(atomic=True) as core:
        core.user.insert(mobile="09120000000", name="Ali", password_hash=h)
        # Commits on exit, rolls back if the block raises

ID GENERATION POLICY:
All row IDs are auto-generated UUIDs inside the operations classes.
Callers never pass an id when inserting.
"""

import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from ..config import settings

SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "schema.sql"

if TYPE_CHECKING:
    from .user import UserOperations


class Core:
    """
    Database Core with aggregate operations.

    Maintains its own connection and transaction state.

    Connection Lifecycle:
    - atomic=True: Connection closes on __exit__ from context manager
    - atomic=False: Read-only use; connection closes on collection
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
            atomic: If True, Core MUST be used as context manager.
        """
        self._conn = connection
        self._atomic = atomic
        self._user_ops = None

    @property
    def user(self) -> "UserOperations":
        """User credential operations (lazy-loaded, cached)."""
        if self._user_ops is None:
            from .user import UserOperations
            self._user_ops = UserOperations(self._conn)
        return self._user_ops

    def __enter__(self) -> "Core":
        """Enter context manager for atomic transaction.

        Raises:
            RuntimeError: If Core was not created with atomic=True
        """
        if not self._atomic:
            raise RuntimeError(
                "Core must be created with atomic=True for context manager use. "
                "Use: with db.get_core(atomic=True) as core:"
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back transaction."""
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            self._conn.close()

    def __del__(self):
        """Close the connection if it is still open."""
        if hasattr(self, "_conn") and self._conn:
            try:
                self._conn.close()
            except sqlite3.Error:
                # Connection may already be closed or invalid
                pass


def _create_connection() -> sqlite3.Connection:
    """Create a fresh database connection.

    Returns:
        SQLite connection with row_factory set to sqlite3.Row
        and foreign keys enabled.
    """
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def get_core(atomic: bool = False) -> Core:
    """
    Get a database Core instance.

    Args:
        atomic: If True, returns a Core that MUST be used as context manager.
                Use for writes that need to commit together.
                If False (default), returns a Core for reads.

    Returns:
        Core instance with aggregate operations
    """
    conn = _create_connection()
    return Core(conn, atomic=atomic)


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

def init_db():
    """Initialize database by running schema.sql if not already initialized."""
    db_path = Path(settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    with sqlite3.connect(str(db_path)) as db:
        cursor = db.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            # Database already initialized, skip
            return

        db.executescript(SCHEMA_PATH.read_text())
        db.commit()
