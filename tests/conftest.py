"""
Pytest configuration and fixtures.

The app is pointed at a throwaway SQLite file before it is imported. Tests do
not clean up between runs: every test registers its own uniquely-emailed users
and all workout data is owner-scoped, so tests never see each other's rows.
"""
import os
import tempfile
import uuid

_TEST_DIR = tempfile.mkdtemp(prefix="workout-tracker-tests-")
os.environ["DB_PATH"] = os.path.join(_TEST_DIR, "test.db")
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["GROQ_API_KEY"] = "test-groq-key"
os.environ["FRONTEND_DIR"] = os.path.join(_TEST_DIR, "no-frontend")
os.environ["ENVIRONMENT"] = "development"

import pytest
from fastapi.testclient import TestClient

from app.main import app

PASSWORD = "password123"


@pytest.fixture
def client():
    """TestClient with lifespan (tables + catalog seed) running."""
    with TestClient(app) as test_client:
        yield test_client


def unique_email(prefix: str = "user") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}@example.com"


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client: TestClient, email: str | None = None, name: str = "Test User", password: str = PASSWORD) -> dict:
    """Register a fresh user and return the {token, user} body."""
    resp = client.post(
        "/auth/register",
        json={"name": name, "email": email or unique_email(), "password": password},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def user(client):
    """A registered user: {token, user, headers}."""
    body = register(client)
    body["headers"] = auth_headers(body["token"])
    return body


@pytest.fixture
def other_user(client):
    body = register(client, email=unique_email("other"))
    body["headers"] = auth_headers(body["token"])
    return body


@pytest.fixture
def exercises(client, user):
    """Seeded catalog as returned by the API."""
    resp = client.get("/exercises", headers=user["headers"])
    assert resp.status_code == 200
    return resp.json()
