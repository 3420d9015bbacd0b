"""
Composition root for The Todo client.

Reads configuration once and wires the storage backend, identity provider,
HTTP gateway and list controller together.
"""

from dataclasses import dataclass
from typing import Optional

from thetodo.config import Config
from thetodo.database import DatabaseManager, database_url_for
from thetodo.logging_config import get_logger
from thetodo.services.identity import IdentityProvider
from thetodo.services.key_value_store import create_key_value_store
from thetodo.services.todo_controller import TodoListController
from thetodo.services.todo_gateway import RemoteTodoGateway

logger = get_logger(__name__)


@dataclass
class ClientServices:
    """Services owned by one running client."""

    controller: TodoListController
    gateway: RemoteTodoGateway
    identity: IdentityProvider
    db_manager: Optional[DatabaseManager] = None

    async def close(self) -> None:
        """Release the HTTP client and database engine."""
        await self.gateway.aclose()
        if self.db_manager is not None:
            await self.db_manager.close()


async def build_services(config: Optional[Config] = None) -> ClientServices:
    """
    Build the client's services from configuration.

    Args:
        config: Application configuration (loaded from the default path if None)

    Returns:
        ClientServices ready for use; call close() when done
    """
    config = config or Config()
    storage = config.get_storage_config()
    server = config.get_server_config()

    db_manager: Optional[DatabaseManager] = None
    if storage['backend'] == 'database':
        storage['data_dir'].mkdir(parents=True, exist_ok=True)
        db_manager = DatabaseManager(database_url_for(storage['data_dir']))
        await db_manager.initialize()

    store = create_key_value_store(config, db_manager)
    identity = IdentityProvider(store)
    gateway = RemoteTodoGateway(identity, server['base_url'], timeout=server['timeout'])
    controller = TodoListController(gateway)

    logger.info(f"Client services ready: server={server['base_url']}, storage={storage['backend']}")
    return ClientServices(
        controller=controller,
        gateway=gateway,
        identity=identity,
        db_manager=db_manager,
    )
