"""
Shared fixtures for the test suite.

``backend`` is parametrized so every test using it runs against both
the SQLite store and an empty in‑memory store.
"""

import pytest
from fastapi.testclient import TestClient

from razor_tracker_api.app.main import create_app
from razor_tracker_api.app.storage import MemoryBackend, SQLiteBackend

from tests.helpers import populate


@pytest.fixture
def sqlite_backend(tmp_path):
    backend = SQLiteBackend(str(tmp_path / "razor_tracker.db"))
    backend.migrate()
    return backend


@pytest.fixture
def memory_backend():
    return MemoryBackend(seed=False)


@pytest.fixture(params=["memory", "sqlite"])
def backend(request, tmp_path):
    if request.param == "memory":
        return MemoryBackend(seed=False)
    backend = SQLiteBackend(str(tmp_path / "razor_tracker.db"))
    backend.migrate()
    return backend


@pytest.fixture
def populated(backend):
    populate(backend)
    return backend


@pytest.fixture
def sqlite_client(sqlite_backend):
    populate(sqlite_backend)
    with TestClient(create_app(backend=sqlite_backend)) as client:
        yield client


@pytest.fixture
def memory_client():
    """Client over the seeded in-memory store."""
    with TestClient(create_app(backend=MemoryBackend())) as client:
        yield client
