import pytest

from config.settings import Settings
from webapp.app import create_app


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        client_origin="http://localhost:8000",
        jwt_secret="test-secret",
        cookie_name="token",
        cookie_days=7,
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session_service(app):
    return app.extensions["session_service"]


def signup(client, name="Ada Lovelace", email="ada@example.com", password="hunter22"):
    return client.post(
        "/api/auth/signup",
        json={"name": name, "email": email, "password": password},
    )
