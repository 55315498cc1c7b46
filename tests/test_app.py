"""Tests for Flask application initialization and configuration."""

import logging

from flask import Flask

from storefront_core.main import app


class TestAppInitialization:
    """Test Flask application initialization."""

    def test_app_is_flask_instance(self):
        assert isinstance(app, Flask)

    def test_app_in_testing_mode_when_configured(self, client):
        """App should respect TESTING configuration."""
        assert app.config['TESTING'] is True

    def test_auth_routes_registered(self):
        rules = {rule.rule: rule.methods for rule in app.url_map.iter_rules()}

        assert "POST" in rules["/auth/signup"]
        assert "POST" in rules["/auth/login"]
        assert "GET" in rules["/auth/me"]
        assert "POST" in rules["/auth/logout"]


class TestCORSConfiguration:
    """Test CORS middleware configuration."""

    def test_cors_headers_for_allowed_origin(self, client):
        response = client.get("/health", headers={"Origin": "http://localhost:3000"})

        assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"
        assert response.headers["Access-Control-Allow-Credentials"] == "true"

    def test_cors_preflight_options_request(self, client):
        """OPTIONS preflight request should be handled."""
        response = client.options(
            "/auth/login",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST"
            }
        )

        assert response.status_code in (200, 204)

    def test_cors_rejects_unknown_origin(self, client):
        response = client.get("/health", headers={"Origin": "http://evil.example.com"})
        assert "Access-Control-Allow-Origin" not in response.headers


class TestLoggingConfiguration:
    """Test logging configuration."""

    def test_logging_level_configured(self):
        """Root logger should have handlers after app import."""
        root_logger = logging.getLogger()
        assert len(root_logger.handlers) > 0

    def test_failed_login_is_logged(self, signed_up, caplog):
        client, _ = signed_up

        with caplog.at_level(logging.WARNING, logger="storefront_core.auth.service"):
            client.post(
                "/auth/login",
                json={"mobile": "09120000000", "password": "wrongpassword"}
            )

        assert any(record.levelno == logging.WARNING for record in caplog.records)
        assert "wrongpassword" not in caplog.text


class TestHealthEndpoint:
    """Test health check endpoint."""

    def test_health_route_registered(self):
        rules = [rule.rule for rule in app.url_map.iter_rules()]
        assert "/health" in rules

    def test_health_returns_status_ok(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}
