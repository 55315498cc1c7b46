"""Shared test fixtures for storefront-core."""

import os
import sqlite3
import tempfile

import pytest

from storefront_core.main import app
from storefront_core.config import settings
from storefront_core.db import SCHEMA_PATH
from storefront_core.db.user import UserOperations
from storefront_core.auth import password

TEST_SECRET = "test-secret-key-for-storefront-core-tests"
TEST_PASSWORD = "password1"
TEST_MOBILE = "09120000000"


@pytest.fixture(autouse=True)
def fast_password_hashing():
    """Lower PBKDF2 cost so tests that hash passwords stay fast."""
    original = settings.password_hash_iterations
    settings.password_hash_iterations = 1_000
    yield
    settings.password_hash_iterations = original


@pytest.fixture
def test_db():
    """Create in-memory test database with schema."""
    db = sqlite3.connect(":memory:")
    db.row_factory = sqlite3.Row

    # Enable foreign key constraints (required for SQLite)
    db.execute("PRAGMA foreign_keys = ON")

    db.executescript(SCHEMA_PATH.read_text())
    db.commit()

    yield db

    db.close()


@pytest.fixture
def user_ops(test_db):
    """UserOperations bound to the in-memory test database."""
    return UserOperations(test_db)


@pytest.fixture
def stored_user(user_ops, test_db):
    """Insert a user with a known password.

    Returns a tuple of (row, plaintext_password).
    """
    row = user_ops.insert(
        mobile=TEST_MOBILE,
        name="Ali",
        password_hash=password.hash_password(TEST_PASSWORD, 1_000),
    )
    test_db.commit()
    return row, TEST_PASSWORD


@pytest.fixture
def client():
    """Create test client for API testing.

    Uses a temp file database so the app's per-request connections share
    state. Each test gets a fresh database.
    """
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    original_db_path = settings.database_path
    original_secret = settings.jwt_secret_key
    try:
        settings.database_path = db_path
        settings.jwt_secret_key = TEST_SECRET

        # Initialize the database with schema
        from storefront_core.db import init_db
        init_db()

        app.config['TESTING'] = True
        with app.test_client() as client:
            yield client

    finally:
        settings.database_path = original_db_path
        settings.jwt_secret_key = original_secret

        try:
            os.unlink(db_path)
        except OSError:
            pass


@pytest.fixture
def signed_up(client):
    """Register a user through the API.

    Returns a tuple of (client, response_json).
    """
    response = client.post(
        "/auth/signup",
        json={"mobile": TEST_MOBILE, "name": "Ali", "password": TEST_PASSWORD},
    )
    assert response.status_code == 201
    return client, response.get_json()
