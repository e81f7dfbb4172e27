# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from task_tracker.client import TaskApiClient, TaskBoard
from task_tracker.config import Settings
from task_tracker.db import TaskStore
from task_tracker.main import create_app


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(database_path=tmp_path / "tasks.db", log_level="WARNING")


@pytest.fixture()
def store(settings: Settings) -> TaskStore:
    store = TaskStore(settings.database_path)
    store.init()
    yield store
    store.close()


@pytest.fixture()
def client(settings: Settings) -> TestClient:
    """HTTP client against an app whose lifespan opens and closes the store."""
    app = create_app(settings, store=TaskStore(settings.database_path))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def board(client: TestClient) -> TaskBoard:
    return TaskBoard(TaskApiClient(http_client=client))
