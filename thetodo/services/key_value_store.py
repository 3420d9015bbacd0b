"""
Durable key-value string storage keyed by installation.

The client only needs ``get`` and ``set`` of short strings (the
installation identity). Concrete stores are chosen once at composition
time from configuration:
- file: JSON document in the data directory
- database: ``preferences`` table through SQLAlchemy
- memory: process-local, nothing survives a restart
"""

import asyncio
import json
from pathlib import Path
from typing import Dict, Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError

from thetodo.config import Config
from thetodo.database import DatabaseManager, PreferenceORM
from thetodo.errors import StorageError
from thetodo.logging_config import get_logger

logger = get_logger(__name__)

PREFERENCES_FILENAME = "preferences.json"


class KeyValueStore(Protocol):
    """Capability interface for durable string storage."""

    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> None: ...


class MemoryKeyValueStore:
    """Process-local store; values are lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def clear(self) -> None:
        self._values.clear()


class FileKeyValueStore:
    """
    Store backed by a single JSON document.

    Every write rewrites the whole document, so concurrent writers are
    last-write-wins. Disk access runs in a worker thread.
    """

    def __init__(self, path: Path):
        """
        Args:
            path: Location of the JSON document (created on first write)
        """
        self.path = path

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Preferences file {self.path} is not a JSON object")
        return data

    def _write(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(".tmp")
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise StorageError(f"Failed to write {self.path}: {e}") from e

    async def get(self, key: str) -> Optional[str]:
        value = (await asyncio.to_thread(self._read_all)).get(key)
        return value if isinstance(value, str) else None

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, key, value)
        logger.debug(f"Stored preference '{key}' in {self.path}")


class DatabaseKeyValueStore:
    """Store backed by the ``preferences`` table."""

    def __init__(self, db_manager: DatabaseManager):
        """
        Args:
            db_manager: Initialized DatabaseManager
        """
        self.db_manager = db_manager

    async def get(self, key: str) -> Optional[str]:
        try:
            async with self.db_manager.get_session() as session:
                row = await session.get(PreferenceORM, key)
                return row.value if row else None
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read preference '{key}': {e}") from e

    async def set(self, key: str, value: str) -> None:
        try:
            async with self.db_manager.get_session() as session:
                await session.merge(PreferenceORM(key=key, value=value))
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write preference '{key}': {e}") from e
        logger.debug(f"Stored preference '{key}' in database")


def create_key_value_store(
    config: Config,
    db_manager: Optional[DatabaseManager] = None,
) -> KeyValueStore:
    """
    Build the configured key-value store.

    Args:
        config: Application configuration
        db_manager: Initialized DatabaseManager, required for the database backend

    Returns:
        KeyValueStore implementation for the configured backend

    Raises:
        ValueError: If the database backend is selected without a db_manager
    """
    storage = config.get_storage_config()
    backend = storage['backend']

    if backend == 'database':
        if db_manager is None:
            raise ValueError("Database storage backend requires a DatabaseManager")
        store: KeyValueStore = DatabaseKeyValueStore(db_manager)
    elif backend == 'memory':
        logger.warning("Using in-memory storage; identity will not survive a restart")
        store = MemoryKeyValueStore()
    else:
        store = FileKeyValueStore(storage['data_dir'] / PREFERENCES_FILENAME)

    logger.info(f"Key-value storage backend: {backend}")
    return store
