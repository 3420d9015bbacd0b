"""
Tests for the installation identity provider.

Covers idempotence, persistence across simulated restarts, concurrent
first calls and the degraded in-memory fallback.
"""

import asyncio
import uuid
from unittest.mock import AsyncMock

from thetodo.errors import StorageError
from thetodo.services.identity import IDENTITY_KEY, IdentityProvider
from thetodo.services.key_value_store import FileKeyValueStore, MemoryKeyValueStore


class TestGetOrCreateIdentity:
    """Tests for identity resolution."""

    async def test_two_calls_return_same_value(self, memory_store):
        provider = IdentityProvider(memory_store)

        first = await provider.get_or_create_identity()
        second = await provider.get_or_create_identity()

        assert first == second

    async def test_new_identity_is_uuid4(self, memory_store):
        identity = await IdentityProvider(memory_store).get_or_create_identity()
        assert uuid.UUID(identity).version == 4

    async def test_new_identity_is_persisted(self, memory_store):
        identity = await IdentityProvider(memory_store).get_or_create_identity()
        assert await memory_store.get(IDENTITY_KEY) == identity

    async def test_existing_identity_is_reused(self):
        store = MemoryKeyValueStore({IDENTITY_KEY: "existing-id"})
        assert await IdentityProvider(store).get_or_create_identity() == "existing-id"

    async def test_empty_identity_is_replaced(self):
        store = MemoryKeyValueStore({IDENTITY_KEY: ""})
        identity = await IdentityProvider(store).get_or_create_identity()

        assert identity
        assert await store.get(IDENTITY_KEY) == identity

    async def test_same_identity_after_restart(self, tmp_path):
        """A new provider over the same durable storage sees the same identity."""
        path = tmp_path / "preferences.json"
        first = await IdentityProvider(FileKeyValueStore(path)).get_or_create_identity()
        second = await IdentityProvider(FileKeyValueStore(path)).get_or_create_identity()

        assert first == second

    async def test_new_identity_after_storage_cleared(self, memory_store):
        first = await IdentityProvider(memory_store).get_or_create_identity()
        memory_store.clear()
        second = await IdentityProvider(memory_store).get_or_create_identity()

        assert first != second

    async def test_identity_cached_for_process_lifetime(self, memory_store):
        """Later storage changes do not alter the identity of a running provider."""
        provider = IdentityProvider(memory_store)
        first = await provider.get_or_create_identity()
        await memory_store.set(IDENTITY_KEY, "changed-elsewhere")

        assert await provider.get_or_create_identity() == first

    async def test_concurrent_first_calls_create_one_identity(self):
        store = MemoryKeyValueStore()
        generated = []

        def generator():
            generated.append(str(uuid.uuid4()))
            return generated[-1]

        provider = IdentityProvider(store, generator=generator)
        results = await asyncio.gather(*(provider.get_or_create_identity() for _ in range(10)))

        assert len(set(results)) == 1
        assert len(generated) == 1
        assert await store.get(IDENTITY_KEY) == results[0]


class TestDegradedMode:
    """Tests for the fallback when storage is unavailable."""

    async def test_read_failure_falls_back_to_memory_identity(self):
        store = AsyncMock()
        store.get.side_effect = StorageError("disk gone")
        provider = IdentityProvider(store)

        identity = await provider.get_or_create_identity()

        assert identity
        assert provider.is_degraded is True
        store.set.assert_not_called()

    async def test_write_failure_keeps_generated_identity(self):
        store = AsyncMock()
        store.get.return_value = None
        store.set.side_effect = StorageError("read-only")
        provider = IdentityProvider(store)

        identity = await provider.get_or_create_identity()

        assert identity
        assert provider.is_degraded is True
        assert await provider.get_or_create_identity() == identity

    async def test_healthy_storage_is_not_degraded(self, memory_store):
        provider = IdentityProvider(memory_store)
        await provider.get_or_create_identity()
        assert provider.is_degraded is False
