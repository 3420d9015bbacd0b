"""
Pytest configuration and fixtures for The Todo tests.

Provides storage fixtures, record factories, a scriptable fake gateway and
an httpx mock transport standing in for the remote store.
"""

from typing import Any, Dict, Optional

import httpx
import pytest
import pytest_asyncio

from thetodo.database import DatabaseManager
from thetodo.models import TodoRecord
from thetodo.services.identity import IdentityProvider
from thetodo.services.key_value_store import MemoryKeyValueStore
from thetodo.services.todo_controller import TodoListController
from tests.helpers import TEST_BASE_URL, TEST_USER_ID, FakeGateway, RecordingHandler


@pytest_asyncio.fixture
async def db_manager(tmp_path):
    """
    Create a file-backed SQLite database for testing.

    Yields:
        Initialized DatabaseManager
    """
    manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await manager.initialize()

    yield manager

    await manager.close()


@pytest.fixture
def memory_store():
    """Empty in-memory key-value store."""
    return MemoryKeyValueStore()


@pytest.fixture
def identity():
    """Identity provider preloaded with a fixed identity."""
    return IdentityProvider(MemoryKeyValueStore({"user_id": TEST_USER_ID}))


@pytest.fixture
def make_record():
    """
    Factory fixture for creating TodoRecord models.

    Example:
        def test_something(make_record):
            record = make_record(id="1", title="Buy milk")
    """
    def _make_record(id: Optional[str] = "1", title: str = "Test todo", done: bool = False) -> TodoRecord:
        return TodoRecord(id=id, title=title, done=done)
    return _make_record


@pytest.fixture
def wire_todo():
    """Factory for wire documents as the remote store sends them."""
    def _wire_todo(oid: str = "1", title: str = "Test todo", done: bool = False) -> Dict[str, Any]:
        return {"_id": {"$oid": oid}, "title": title, "done": done}
    return _wire_todo


@pytest.fixture
def fake_gateway():
    """Fresh FakeGateway."""
    return FakeGateway()


@pytest.fixture
def controller(fake_gateway):
    """Controller wired to the fake gateway."""
    return TodoListController(fake_gateway)


@pytest.fixture
def mock_http():
    """
    Factory for an AsyncClient whose transport is a RecordingHandler.

    Example:
        client, handler = mock_http(lambda request: httpx.Response(200, json=[]))
    """
    def _mock_http(responder):
        handler = RecordingHandler(responder)
        client = httpx.AsyncClient(base_url=TEST_BASE_URL, transport=httpx.MockTransport(handler))
        return client, handler
    return _mock_http
