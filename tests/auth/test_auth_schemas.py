"""
Tests for Authentication Pydantic schemas (API validation).

Tests verify that:
- Signup and login requests enforce mobile, password and name lengths
- User views default created_at and restrict role to the known values
- Token payloads require every identity claim
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from storefront_core.auth.schemas import (
    AuthResponse,
    LoginRequest,
    SignupRequest,
    TokenPayload,
    UserResponse,
)


class TestSignupRequest:
    """Tests for SignupRequest schema."""

    def test_valid_data(self):
        data = SignupRequest(mobile="09120000000", name="Ali", password="password1")

        assert data.mobile == "09120000000"
        assert data.name == "Ali"
        assert data.password == "password1"

    @pytest.mark.parametrize("mobile", ["0912000000", "091200000000", ""])
    def test_mobile_must_be_eleven_characters(self, mobile):
        with pytest.raises(ValidationError) as exc_info:
            SignupRequest(mobile=mobile, name="Ali", password="password1")

        assert exc_info.value.errors()[0]["loc"] == ("mobile",)

    def test_password_min_length(self):
        with pytest.raises(ValidationError) as exc_info:
            SignupRequest(mobile="09120000000", name="Ali", password="seven77")

        assert exc_info.value.errors()[0]["loc"] == ("password",)

    def test_name_min_length(self):
        with pytest.raises(ValidationError) as exc_info:
            SignupRequest(mobile="09120000000", name="Al", password="password1")

        assert exc_info.value.errors()[0]["loc"] == ("name",)

    def test_missing_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            SignupRequest(mobile="09120000000")

        missing = {err["loc"][0] for err in exc_info.value.errors()}
        assert missing == {"name", "password"}


class TestLoginRequest:
    """Tests for LoginRequest schema."""

    def test_valid_data(self):
        data = LoginRequest(mobile="09120000000", password="password1")
        assert data.mobile == "09120000000"

    def test_name_not_required(self):
        data = LoginRequest.model_validate({"mobile": "09120000000", "password": "password1"})
        assert not hasattr(data, "name")

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError):
            LoginRequest(mobile="09120000000", password="short")


class TestUserResponse:
    """Tests for UserResponse schema."""

    def test_parses_iso_timestamp(self):
        user = UserResponse(
            id="550e8400-e29b-41d4-a716-446655440000",
            mobile="09120000000",
            name="Ali",
            role="user",
            created_at="2025-10-19T10:30:00Z",
        )
        assert isinstance(user.created_at, datetime)

    def test_created_at_optional(self):
        user = UserResponse(id="1", mobile="09120000000", name="Ali", role="customer")
        assert user.created_at is None

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            UserResponse(id="1", mobile="09120000000", name="Ali", role="admin")

    def test_json_dump_has_no_password_field(self):
        user = UserResponse(id="1", mobile="09120000000", name="Ali", role="user")
        dumped = user.model_dump(mode="json")

        assert set(dumped) == {"id", "mobile", "name", "role", "created_at"}


class TestAuthResponse:
    """Tests for AuthResponse schema."""

    def test_nests_user(self):
        response = AuthResponse(
            user=UserResponse(id="1", mobile="09120000000", name="Ali", role="user"),
            token="abc.def.ghi",
        )
        dumped = response.model_dump(mode="json")

        assert dumped["user"]["id"] == "1"
        assert dumped["token"] == "abc.def.ghi"


class TestTokenPayload:
    """Tests for TokenPayload schema."""

    def test_valid_claims(self):
        payload = TokenPayload(
            sub="1", role="user", mobile="09120000000", iat=1_700_000_000, exp=1_702_592_000
        )
        assert payload.exp > payload.iat

    def test_missing_claim_rejected(self):
        with pytest.raises(ValidationError):
            TokenPayload(sub="1", role="user", iat=1, exp=2)
