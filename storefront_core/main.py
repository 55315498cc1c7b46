"""Flask application entry point."""

import logging
import sqlite3

from flask import Flask, jsonify
from flask_cors import CORS

from .config import settings
from .db import init_db
from .exceptions import (
    AuthenticationError,
    ConflictError,
    InternalError,
    ResourceNotFound,
    StorefrontError,
    ValidationError,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Create Flask app
app = Flask(__name__)

# CORS configuration
CORS(app, origins=settings.cors_origins, supports_credentials=True)


# Database initialization (runs once on app startup)
def initialize_database():
    """Initialize database on app startup."""
    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise


with app.app_context():
    initialize_database()


# Error handlers
def _error_response(error: StorefrontError, status: int):
    response = {
        "error": {
            "type": error.__class__.__name__,
            "message": error.message
        }
    }
    if error.details:
        response["error"]["details"] = error.details
    return jsonify(response), status


def _internal_error_response():
    error = InternalError()
    return jsonify({
        "error": {
            "type": error.__class__.__name__,
            "message": error.message
        }
    }), 500


@app.errorhandler(ResourceNotFound)
def handle_not_found(error):
    """Handle ResourceNotFound exceptions (including UserNotFound)."""
    return _error_response(error, 404)


@app.errorhandler(ValidationError)
def handle_validation_error(error):
    """Handle request body validation failures."""
    return _error_response(error, 422)


@app.errorhandler(AuthenticationError)
def handle_authentication_error(error):
    """Handle InvalidCredentials and Unauthenticated."""
    return _error_response(error, 401)


@app.errorhandler(ConflictError)
def handle_conflict(error):
    """Handle HandleConflict and other uniqueness conflicts."""
    return _error_response(error, 409)


@app.errorhandler(StorefrontError)
def handle_storefront_error(error):
    """Handle remaining StorefrontError exceptions (UserCreationFailed, DatabaseError)."""
    logger.error(f"{error.__class__.__name__}: {error.message}")
    return _error_response(error, 500)


@app.errorhandler(sqlite3.Error)
def handle_database_failure(error):
    """Downgrade persistence failures to a generic internal error."""
    logger.exception(f"Database failure: {error}")
    return _internal_error_response()


@app.errorhandler(500)
def handle_internal_error(error):
    """Handle internal server errors."""
    logger.error(f"Internal error: {error}")
    return _internal_error_response()


# Health check endpoint
@app.route("/health")
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


# Register blueprints
from .auth.api import auth_bp

app.register_blueprint(auth_bp)


if __name__ == "__main__":
    app.run(debug=True)
