import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from modules.users.models import (
    LoginRequest,
    PasswordChangeRequest,
    RegisterRequest,
    TokenPayload,
    TokenResponse,
    UserResponse,
    UserUpdate,
)


class TestUser:
    def test_create_user(self, make_user):
        """Should create a user with all audit fields."""
        user = make_user(user_id="user-1", email="ada@example.com")
        assert user.id == "user-1"
        assert user.created_by == "user-1"
        assert user.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_requires_all_fields(self):
        with pytest.raises(ValidationError):
            UserUpdate(first_name="A", last_name="B", email="a@example.com")


class TestUserResponse:
    def test_excludes_password(self, make_user):
        """The public view must never carry the digest."""
        response = UserResponse.from_user(make_user(password="secret-digest"))

        dumped = response.model_dump()
        assert "password" not in dumped
        assert "secret-digest" not in response.model_dump_json()

    def test_copies_profile_fields(self, make_user):
        user = make_user(first_name="Grace", last_name="Hopper")
        response = UserResponse.from_user(user)
        assert response.first_name == "Grace"
        assert response.last_name == "Hopper"
        assert response.updated_at == user.updated_at


class TestTokenPayload:
    def test_parse_payload(self):
        payload = TokenPayload(email="ada@example.com", exp=1704067200)
        assert payload.email == "ada@example.com"
        assert payload.exp == 1704067200

    def test_ignores_extra_claims(self):
        payload = TokenPayload(email="ada@example.com", exp=1704067200, iat=1)
        assert not hasattr(payload, "iat")

    def test_payload_is_immutable(self):
        payload = TokenPayload(email="ada@example.com", exp=1704067200)
        with pytest.raises(ValidationError):
            payload.email = "other@example.com"

    def test_requires_email(self):
        with pytest.raises(ValidationError):
            TokenPayload(exp=1704067200)


class TestRequests:
    def test_register_request(self):
        request = RegisterRequest(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            password="long-enough",
        )
        assert request.email == "ada@example.com"

    def test_register_rejects_short_password(self):
        with pytest.raises(ValidationError):
            RegisterRequest(
                first_name="Ada",
                last_name="Lovelace",
                email="ada@example.com",
                password="short",
            )

    def test_register_rejects_invalid_email(self):
        with pytest.raises(ValidationError):
            RegisterRequest(
                first_name="Ada",
                last_name="Lovelace",
                email="not-an-email",
                password="long-enough",
            )

    def test_register_rejects_empty_name(self):
        with pytest.raises(ValidationError):
            RegisterRequest(
                first_name="",
                last_name="Lovelace",
                email="ada@example.com",
                password="long-enough",
            )

    def test_password_change_validates_new_password(self):
        with pytest.raises(ValidationError):
            PasswordChangeRequest(current_password="old", new_password="short")

    def test_login_request(self):
        request = LoginRequest(email="ada@example.com", password="x")
        assert request.password == "x"


class TestTokenResponse:
    def test_default_token_type(self):
        assert TokenResponse(access_token="abc").token_type == "bearer"
