"""
Pytest configuration and shared fixtures for the API tests.

Every test gets its own application with a fresh in-memory SQLite database.
"""
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add the backend directory to Python path so imports work correctly
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from config import Settings
from main import create_app


@pytest.fixture
def settings():
    return Settings(
        SECRET_KEY="test-secret-key-for-testing-only",
        DATABASE_URL="sqlite://",
        ACCESS_TOKEN_EXPIRE_MINUTES=60,
        ALLOW_ADMIN_REGISTRATION=True,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Create test client; entering it runs startup so tables exist."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session(app, client):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(client):
    """Register and log in a user, returning its id and auth headers."""
    counter = {"n": 0}

    def _make(role="customer", email=None, password="secret123"):
        counter["n"] += 1
        email = email or f"{role}{counter['n']}@example.com"
        res = client.post("/auth/register", json={"email": email, "password": password, "role": role})
        assert res.status_code == 201, res.text
        user_id = res.json()["user"]["id"]

        res = client.post("/auth/login", json={"email": email, "password": password})
        assert res.status_code == 200, res.text
        token = res.json()["token"]
        return {"id": user_id, "email": email, "headers": {"Authorization": f"Bearer {token}"}}

    return _make


@pytest.fixture
def admin(make_user):
    return make_user(role="admin")


@pytest.fixture
def customer(make_user):
    return make_user()


@pytest.fixture
def other_customer(make_user):
    return make_user()


@pytest.fixture
def restaurant(client, admin):
    res = client.post(
        "/restaurants",
        json={"nombre": "Restaurante Central", "direccion": "Calle Falsa 123"},
        headers=admin["headers"],
    )
    assert res.status_code == 201, res.text
    return res.json()["restaurant"]


@pytest.fixture
def menu(client, admin, restaurant):
    res = client.post(
        f"/restaurants/{restaurant['id']}/menus",
        json={"platillo": "Ensalada", "precio": 7.5},
        headers=admin["headers"],
    )
    assert res.status_code == 201, res.text
    return res.json()["menu"]
