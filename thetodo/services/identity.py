"""Installation identity management for remote calls."""

import asyncio
import uuid
from typing import Callable, Optional

from thetodo.errors import StorageError
from thetodo.logging_config import get_logger
from thetodo.services.key_value_store import KeyValueStore

logger = get_logger(__name__)

IDENTITY_KEY = "user_id"


def _new_identity() -> str:
    return str(uuid.uuid4())


class IdentityProvider:
    """
    Resolves the pseudo-anonymous identity sent with every request.

    The identity is read from durable storage, generated once when missing,
    and cached for the rest of the process. If storage is unavailable an
    in-memory identity is used instead (degraded mode): the client keeps
    working but will appear as a new user after a restart.
    """

    def __init__(
        self,
        store: KeyValueStore,
        generator: Callable[[], str] = _new_identity,
    ):
        """
        Initialize the identity provider.

        Args:
            store: Durable key-value storage
            generator: Factory for new identities (UUID v4 by default)
        """
        self.store = store
        self._generator = generator
        self._identity: Optional[str] = None
        self._degraded = False
        self._lock = asyncio.Lock()

    @property
    def is_degraded(self) -> bool:
        """True when the identity could not be persisted."""
        return self._degraded

    async def get_or_create_identity(self) -> str:
        """
        Get the persisted identity or create and persist a new one.

        Concurrent first calls are serialized, so only one identity is ever
        generated per process.

        Returns:
            Identity string
        """
        if self._identity is not None:
            return self._identity

        async with self._lock:
            if self._identity is None:
                self._identity = await self._load_or_create()
        return self._identity

    async def _load_or_create(self) -> str:
        try:
            existing = await self.store.get(IDENTITY_KEY)
        except StorageError as e:
            return self._fallback(f"Failed to read identity: {e}")

        if existing:
            logger.debug("Loaded existing installation identity")
            return existing

        new_id = self._generator()
        try:
            await self.store.set(IDENTITY_KEY, new_id)
        except StorageError as e:
            logger.warning(f"Failed to persist identity, using it for this session only: {e}")
            self._degraded = True
            return new_id

        logger.info(f"Created new installation identity: {new_id}")
        return new_id

    def _fallback(self, reason: str) -> str:
        self._degraded = True
        new_id = self._generator()
        logger.warning(f"{reason}. Using in-memory identity for this session")
        return new_id
