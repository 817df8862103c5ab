from __future__ import annotations

import re
from collections.abc import Iterator

import pytest
from flask import Flask
from flask.testing import FlaskClient

from snippetbox.app import create_app
from snippetbox.infrastructure.container import Container
from snippetbox.infrastructure.db import build_engine, build_session_factory, init_db
from snippetbox.shared.config import AppConfig, DatabaseConfig, SecurityConfig

CSRF_TOKEN_RX = re.compile(r"<input type='hidden' name='csrf_token' value='(.+)'>")

SEED_SNIPPET_TITLE = "An old silent pond"
SEED_SNIPPET_CONTENT = "An old silent pond...\nA frog jumps into the pond,\nsplash! Silence again."
ALICE_EMAIL = "alice@example.com"
ALICE_PASSWORD = "pa$$word"
DUPE_EMAIL = "dupe@example.com"


def extract_csrf_token(body: str) -> str:
    match = CSRF_TOKEN_RX.search(body)
    assert match is not None, "no csrf token found in body"
    return match.group(1)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "snippetbox.log"))
    monkeypatch.delenv("APP_ENV", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)


@pytest.fixture()
def db_config(tmp_path) -> DatabaseConfig:
    return DatabaseConfig(url=f"sqlite:///{tmp_path / 'snippetbox.db'}")


@pytest.fixture()
def session_factory(db_config: DatabaseConfig):
    engine = build_engine(db_config)
    init_db(engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture()
def config(db_config: DatabaseConfig) -> AppConfig:
    return AppConfig(
        app_env="test",
        secret_key="test-secret-key",
        database=db_config,
        security=SecurityConfig(cookie_secure=False),
    )


@pytest.fixture()
def app(config: AppConfig) -> Iterator[Flask]:
    app = create_app(config)
    app.config.update(TESTING=True)
    container: Container = app.extensions["snippetbox"]

    container.snippet_repository.insert(SEED_SNIPPET_TITLE, SEED_SNIPPET_CONTENT, 365)
    container.register_user_use_case.execute("Alice Jones", ALICE_EMAIL, ALICE_PASSWORD)
    container.register_user_use_case.execute("Dupe User", DUPE_EMAIL, ALICE_PASSWORD)
    yield app


@pytest.fixture()
def container(app: Flask) -> Container:
    return app.extensions["snippetbox"]


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


def _login(client: FlaskClient, email: str, password: str):
    page = client.get("/user/login")
    token = extract_csrf_token(page.get_data(as_text=True))
    return client.post(
        "/user/login",
        data={"email": email, "password": password, "csrf_token": token},
    )


@pytest.fixture()
def login():
    """Log a test client in through the login form."""

    def do_login(client: FlaskClient, email: str = ALICE_EMAIL, password: str = ALICE_PASSWORD):
        return _login(client, email, password)

    return do_login


@pytest.fixture()
def csrf_token():
    """Fetch a page and return the CSRF token embedded in it."""

    def fetch(client: FlaskClient, path: str = "/user/login") -> str:
        return extract_csrf_token(client.get(path).get_data(as_text=True))

    return fetch


@pytest.fixture()
def logged_in_client(client: FlaskClient) -> FlaskClient:
    response = _login(client, ALICE_EMAIL, ALICE_PASSWORD)
    assert response.status_code == 303
    return client
