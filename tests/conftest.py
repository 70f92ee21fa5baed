"""Shared fixtures: settings, an in-memory SQLite database and API clients."""

from typing import Callable

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from app.core.config import Settings
from app.core.security import TokenService
from app.db.init_db import init_db
from app.db.session import build_engine
from app.main import create_app

TEST_SECRET = "test-secret"


def make_settings(**overrides) -> Settings:
    values = {
        "SECRET_KEY": TEST_SECRET,
        "DATABASE_URL": "sqlite://",
        "BCRYPT_ROUNDS": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(TEST_SECRET)


@pytest.fixture
def engine(settings):
    engine = build_engine(settings)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(params=["sql", "memory"])
def app(request):
    """The application on each storage backend."""
    app = create_app(make_settings(STORAGE_BACKEND=request.param))
    if app.state.engine is not None:
        init_db(app.state.engine)
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def register_user(client) -> Callable[..., dict]:
    """
    Register a user and return the response body.

    The cookie jar is cleared afterwards so each request authenticates
    only with what the test passes explicitly.
    """
    def _register(email: str = "a@b.com", password: str = "pw", first_name: str = "Bob",
                  last_name: str = "Smith") -> dict:
        response = client.post("/api/v1/user/register", json={
            "email": email,
            "password": password,
            "firstName": first_name,
            "lastName": last_name,
        })
        assert response.status_code == 201, response.text
        client.cookies.clear()
        return response.json()

    return _register


@pytest.fixture
def auth_headers(register_user) -> Callable[..., dict]:
    """Register a user and return Bearer headers for it."""
    def _headers(email: str = "a@b.com") -> dict:
        body = register_user(email=email)
        return {"Authorization": f"Bearer {body['token']}"}

    return _headers
