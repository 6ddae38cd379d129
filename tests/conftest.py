"""
Shared fixtures for the User Registry API tests.

Every test runs against a fresh SQLite file in ``tmp_path`` and with
the cheapest bcrypt cost factor.
"""

import pytest
from fastapi.testclient import TestClient

from user_registry_api.app.core.config import settings
from user_registry_api.app.core.db import init_db
from user_registry_api.app.main import app


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    db_file = tmp_path / "users.db"
    monkeypatch.setattr(settings, "database_url", str(db_file))
    monkeypatch.setattr(settings, "bcrypt_rounds", 4)
    init_db()
    return db_file


@pytest.fixture
def client() -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def register(client):
    """Register a user through the API and return the response."""

    def _register(name="Jane Doe", email="jane@example.com", password="secret123"):
        return client.post(
            "/api/v1/users/",
            json={"name": name, "email": email, "password": password},
        )

    return _register
