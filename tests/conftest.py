"""Shared fixtures: an app per test backed by its own in-memory SQLite database."""

import os

# Must be set before devdeck.core.config builds its settings.
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient

from devdeck.core.config import Settings
from devdeck.main import create_app

ADMIN_EMAIL = "admin@devdeck.com"
ADMIN_PASSWORD = "admin123"


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "DEFAULT_ADMIN_EMAIL": ADMIN_EMAIL,
        "DEFAULT_ADMIN_PASSWORD": ADMIN_PASSWORD,
        "SEED_DEFAULT_ADMIN": True,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def app():
    return create_app(make_settings())


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(client, app):
    """A session on the same database the client talks to."""
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client, name, email, password="pw1", role=None, headline=None) -> dict:
    body = {"name": name, "email": email, "password": password}
    if role is not None:
        body["role"] = role
    if headline is not None:
        body["headline"] = headline
    response = client.post("/users", json=body)
    assert response.status_code == 201, f"Registration failed: {response.text}"
    return response.json()


def login(client, email, password="pw1") -> str:
    response = client.post("/login", json={"email": email, "password": password})
    assert response.status_code == 200, f"Login failed: {response.text}"
    return response.json()["token"]


def create_project(client, token, title="Project", **fields) -> dict:
    body = {"title": title, "description": fields.pop("description", f"About {title}")}
    body.update(fields)
    response = client.post("/projects", json=body, headers=auth(token))
    assert response.status_code == 201, f"Project creation failed: {response.text}"
    return response.json()


@pytest.fixture
def admin_token(client):
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def alice(client):
    user = register(client, "Alice", "alice@x.com", "pw1")
    return {"user": user, "token": login(client, "alice@x.com", "pw1")}


@pytest.fixture
def bob(client):
    user = register(client, "Bob", "bob@x.com", "pw2")
    return {"user": user, "token": login(client, "bob@x.com", "pw2")}


def assert_no_password(payload):
    """Recursively check that no password material appears in a JSON payload."""
    if isinstance(payload, dict):
        for key, value in payload.items():
            assert "password" not in key.lower(), f"Password field '{key}' leaked"
            assert_no_password(value)
    elif isinstance(payload, list):
        for item in payload:
            assert_no_password(item)
    elif isinstance(payload, str):
        assert not payload.startswith("$2"), "bcrypt hash leaked in response"
