import pytest
from fastapi.testclient import TestClient

from fungimart.config import Settings
from fungimart.main import create_app

from .utils import sign_token


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        jwt_secret="test-secret",
        listings_db_file=tmp_path / "listings_db.json",
        users_db_file=tmp_path / "users_db.json",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_token(settings):
    def _make(user_id: str, full_name: str = None, **claims) -> str:
        return sign_token(settings.jwt_secret, user_id, full_name, algorithm=settings.jwt_algorithm, **claims)

    return _make


@pytest.fixture
def auth_headers(make_token):
    def _headers(user_id: str, full_name: str = None) -> dict:
        return {"Authorization": f"Bearer {make_token(user_id, full_name)}"}

    return _headers
