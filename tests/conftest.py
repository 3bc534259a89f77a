# tests/conftest.py

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from task_manager.config import Settings
from task_manager.db import KeyValueStore, SessionStore, TaskStore, UserDirectory
from task_manager.main import create_app
from task_manager.state import AppState

from .factories import DEMO_CREDENTIALS


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(data_dir=tmp_path, db_path=tmp_path / "task_manager.db")


@pytest.fixture()
def kv(settings: Settings) -> KeyValueStore:
    return KeyValueStore(settings.db_path)


@pytest.fixture()
def store(kv: KeyValueStore) -> TaskStore:
    return TaskStore(kv)


@pytest.fixture()
def users(kv: KeyValueStore) -> UserDirectory:
    return UserDirectory(kv)


@pytest.fixture()
def sessions(kv: KeyValueStore) -> SessionStore:
    return SessionStore(kv)


@pytest.fixture()
def state(settings: Settings) -> AppState:
    return AppState.create(settings)


@pytest.fixture()
def client(settings: Settings):
    """TestClient with the lifespan running, so app.state is populated."""
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture()
def logged_in(client: TestClient) -> TestClient:
    response = client.post("/login", data=DEMO_CREDENTIALS)
    assert response.status_code == 200
    return client
