import pytest
from fastapi.testclient import TestClient

from cartshop.config import Settings
from cartshop.db import Database
from cartshop.main import create_app


def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def client(settings):
    # entering the client runs the lifespan: tables + seed catalog
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def database(settings):
    database = Database(settings.DATABASE_URL)
    database.init_db(seed=True)
    try:
        yield database
    finally:
        database.dispose()


@pytest.fixture
def db(database):
    s = database.session()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def login(client):
    """Register (if needed) and log in a user; returns auth headers."""

    def _login(username="alice", password="pw123"):
        client.post("/users", json={"username": username, "password": password})
        r = client.post("/users/login", json={"username": username, "password": password})
        assert r.status_code == 200
        return {"Authorization": f"Bearer {r.json()['token']}"}

    return _login
