"""
Shared fixtures: an app backed by an in-memory SQLite store and helpers
to register / log in users through the HTTP API.
"""

from typing import Dict, Generator

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from main import create_app

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


def user_payload(email: str = "alice@example.com", **overrides) -> Dict[str, str]:
    payload = {
        "username": "alice",
        "email": email,
        "password": "s3cret-pass",
        "dateOfBirth": "1990-04-12",
        "gender": "Female",
        "phoneNumber": "5551234567",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        jwt_secret=TEST_SECRET,
        database_url="sqlite+aiosqlite://",
        bcrypt_rounds=4,
    )


@pytest.fixture
def client(settings) -> Generator[TestClient, None, None]:
    """TestClient used as a context manager so startup creates the schema."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register_and_login(client):
    """Register a user, log in, return ``(user_json, auth_headers)``."""

    def _do(email: str = "alice@example.com", **overrides):
        payload = user_payload(email, **overrides)
        resp = client.post("/api/auth/register", json=payload)
        assert resp.status_code == 201, resp.text
        resp = client.post(
            "/api/auth/login",
            json={"email": email, "password": payload["password"]},
        )
        assert resp.status_code == 200, resp.text
        body = resp.json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}

    return _do
