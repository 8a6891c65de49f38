"""Fixtures for HTTP API tests.

Each test gets a fresh app backed by its own SQLite file. The TestClient is
used as a context manager so the lifespan (schema creation) runs and all
requests share one event loop.
"""

import pytest
from fastapi.testclient import TestClient

from warden.presentation.api.app import create_app
from warden_config.settings import Settings

TEST_SECRET = "api-test-secret"
FEDERATION_SECRET = "callback-secret"


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        jwt_secret_key=TEST_SECRET,
        federation_callback_secret=FEDERATION_SECRET,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'warden.db'}",
        password_hash_rounds=4,
    )


@pytest.fixture
def client(api_settings):
    app = create_app(api_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registered_user(client) -> dict:
    payload = {"email": "a@x.com", "password": "pw123", "fullName": "Alice"}
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201
    return payload


@pytest.fixture
def login_tokens(client, registered_user) -> dict:
    response = client.post(
        "/api/auth/login",
        json={
            "email": registered_user["email"],
            "password": registered_user["password"],
        },
    )
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def federation_headers() -> dict:
    return {"X-Federation-Secret": FEDERATION_SECRET}
