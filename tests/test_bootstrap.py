"""
Tests for the composition root.

Builds the client services from real configuration files and checks that
the configured storage backend is used and that the identity survives a
restart where the backend is durable.
"""

import pytest

from thetodo.bootstrap import build_services
from thetodo.config import Config
from thetodo.database import DB_FILENAME
from thetodo.services.key_value_store import (
    DatabaseKeyValueStore,
    FileKeyValueStore,
    MemoryKeyValueStore,
    PREFERENCES_FILENAME,
)
from thetodo.services.todo_controller import TodoListController


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        'THETODO_SERVER_URL',
        'THETODO_REQUEST_TIMEOUT',
        'THETODO_STORAGE_BACKEND',
        'THETODO_DATA_DIR',
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_config(tmp_path):
    """Factory for a Config using the given storage backend under tmp_path."""
    def _make_config(backend: str) -> Config:
        path = tmp_path / "config.ini"
        path.write_text(f"""
[server]
base_url = http://todo.test/
timeout = 3

[storage]
backend = {backend}
data_dir = {tmp_path / 'data'}
""")
        return Config(path)
    return _make_config


async def identity_after_restart(config: Config):
    """Create an identity, shut down, build again and return both identities."""
    services = await build_services(config)
    try:
        first = await services.identity.get_or_create_identity()
    finally:
        await services.close()

    services = await build_services(config)
    try:
        second = await services.identity.get_or_create_identity()
    finally:
        await services.close()
    return first, second


class TestBuildServices:
    """Tests for build_services()."""

    async def test_wires_controller_to_gateway(self, make_config):
        services = await build_services(make_config('memory'))
        try:
            assert isinstance(services.controller, TodoListController)
            assert services.controller.gateway is services.gateway
            assert services.gateway.identity is services.identity
            assert services.gateway.base_url == "http://todo.test"
            assert services.db_manager is None
        finally:
            await services.close()

    async def test_file_backend(self, make_config, tmp_path):
        config = make_config('file')

        services = await build_services(config)
        await services.close()
        assert isinstance(services.identity.store, FileKeyValueStore)

        first, second = await identity_after_restart(config)
        assert first == second
        assert (tmp_path / 'data' / PREFERENCES_FILENAME).exists()

    async def test_database_backend(self, make_config, tmp_path):
        config = make_config('database')

        services = await build_services(config)
        await services.close()
        assert isinstance(services.identity.store, DatabaseKeyValueStore)
        assert services.db_manager is not None

        first, second = await identity_after_restart(config)
        assert first == second
        assert (tmp_path / 'data' / DB_FILENAME).exists()

    async def test_memory_backend_forgets_identity(self, make_config):
        config = make_config('memory')

        services = await build_services(config)
        await services.close()
        assert isinstance(services.identity.store, MemoryKeyValueStore)

        first, second = await identity_after_restart(config)
        assert first != second

    async def test_close_releases_database(self, make_config):
        services = await build_services(make_config('database'))
        assert services.db_manager.is_initialized

        await services.close()

        assert not services.db_manager.is_initialized
