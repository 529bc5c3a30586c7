from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path
import sys
from typing import Any

import pytest
import pytest_asyncio
from mongomock_motor import AsyncMongoMockClient

SERVICE_ROOT = Path(__file__).resolve().parents[1]
if str(SERVICE_ROOT) not in sys.path:
    sys.path.insert(0, str(SERVICE_ROOT))

from projects_store.config import get_settings
from projects_store.db import DocumentStore
from projects_store.repositories import ProjectRepository


class TrackedClient:
    """Per-call client handed to the store; records opens and closes.

    Closing only marks the handle as released so that every call sees the
    same in-memory data.
    """

    def __init__(self, backend: AsyncMongoMockClient, tracker: "ConnectionTracker") -> None:
        self._backend = backend
        self._tracker = tracker

    def __getitem__(self, name: str) -> Any:
        return self._backend[name]

    def close(self) -> None:
        self._tracker.closed += 1


class ConnectionTracker:
    def __init__(self) -> None:
        self.opened = 0
        self.closed = 0
        self.last_kwargs: dict[str, Any] = {}


@pytest.fixture(autouse=True)
def _env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONGO_CONNECTION_STRING", "mongodb://localhost:27017/test")
    monkeypatch.setenv("MONGO_DB_NAME", "projects-manager-test")
    get_settings.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture
def connections() -> ConnectionTracker:
    return ConnectionTracker()


@pytest_asyncio.fixture
async def mongo_client(
    monkeypatch: pytest.MonkeyPatch, connections: ConnectionTracker
) -> AsyncIterator[AsyncMongoMockClient]:
    client = AsyncMongoMockClient()

    def _client_factory(*_args, **kwargs) -> TrackedClient:
        connections.opened += 1
        connections.last_kwargs = kwargs
        return TrackedClient(client, connections)

    monkeypatch.setattr("projects_store.db.store.AsyncIOMotorClient", _client_factory)
    yield client
    client.close()


@pytest.fixture
def store(mongo_client: AsyncMongoMockClient) -> DocumentStore:
    return DocumentStore()


@pytest.fixture
def repository(store: DocumentStore) -> ProjectRepository:
    return ProjectRepository(store)
