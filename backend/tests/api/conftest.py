"""
API test fixtures.

Routes are exercised through a TestClient whose user service is wired to the
in-memory repository, so no database is needed.
"""

import pytest
from fastapi.testclient import TestClient

from api import app
from api.dependencies import get_user_service
from modules.users.service import UserService


@pytest.fixture
def user_service(memory_repository, security) -> UserService:
    return UserService(repository=memory_repository, security=security)


@pytest.fixture
def api_client(user_service):
    """TestClient with the user service dependency overridden."""
    app.dependency_overrides[get_user_service] = lambda: user_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register(api_client):
    """Register a user over HTTP and return the response body."""

    def _register(
        email: str = "ada@example.com",
        password: str = "s3cret-password",
        first_name: str = "Ada",
        last_name: str = "Lovelace",
    ) -> dict:
        response = api_client.post(
            "/api/users",
            json={
                "first_name": first_name,
                "last_name": last_name,
                "email": email,
                "password": password,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def login(api_client):
    """Log in over HTTP and return Authorization headers."""

    def _login(email: str = "ada@example.com", password: str = "s3cret-password") -> dict:
        response = api_client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login
