"""
Todo list controller for The Todo client.

Owns the authoritative local list and reconciles it with the remote store:
- refresh(): full replace from the server
- add(): append after the server confirms the new record
- toggle_done(): optimistic flip, rolled back on failure
- remove(): optimistic removal, whole-list snapshot restored on failure

Failures never propagate out of these calls; they end up in last_error.

All state changes happen in the synchronous sections of these coroutines,
so the controller relies on running inside a single event loop and needs
no lock. Network calls of different mutations may be in flight at the
same time; completions apply to the list as it is when they arrive.
"""

from typing import TYPE_CHECKING, Any, Awaitable, Callable, List, Optional, Set, Tuple

from thetodo.errors import ParseError, ServerError, TodoClientError, TransportError, UnexpectedError
from thetodo.logging_config import get_logger
from thetodo.models import TodoListState, TodoRecord
from thetodo.services.result import Err, Result

if TYPE_CHECKING:
    from thetodo.services.todo_gateway import RemoteTodoGateway

logger = get_logger(__name__)

ChangeCallback = Callable[["TodoListController"], None]

# Prefix of the user-facing message for a ServerError, per operation
_SERVER_ERROR_PREFIXES = {
    "list": "Server error",
    "create": "Failed to add todo",
    "update": "Failed to update todo",
    "delete": "Failed to delete todo",
}


def describe_error(operation: str, error: TodoClientError) -> str:
    """
    Build the user-facing message for a failed remote operation.

    Args:
        operation: One of list, create, update, delete
        error: Error carried by the gateway's Err result

    Returns:
        Message suitable for display
    """
    if isinstance(error, ServerError):
        prefix = _SERVER_ERROR_PREFIXES.get(operation, "Server error")
        return f"{prefix}: {error.status}"
    if isinstance(error, TransportError):
        return f"Network error: {error}"
    if isinstance(error, ParseError):
        return f"Unexpected response: {error}"
    if isinstance(error, UnexpectedError):
        return f"Unexpected error: {error}"
    return f"Error: {error}"


class TodoListController:
    """
    Reconciliation core between the rendered list and the remote store.

    Observers register with subscribe() and are called with the controller
    after every state change.
    """

    def __init__(self, gateway: "RemoteTodoGateway"):
        """
        Initialize the controller with an empty list.

        Args:
            gateway: Remote gateway returning Ok/Err results
        """
        self.gateway = gateway
        self._records: List[TodoRecord] = []
        self._loading = False
        self._last_error: Optional[str] = None
        self._pending_ids: Set[str] = set()
        self._listeners: List[ChangeCallback] = []

    # =========================================================================
    # OBSERVABLE STATE
    # =========================================================================

    @property
    def records(self) -> Tuple[TodoRecord, ...]:
        return tuple(self._records)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def state(self) -> TodoListState:
        """Immutable snapshot of records, loading flag and last error."""
        return TodoListState(
            records=tuple(self._records),
            loading=self._loading,
            last_error=self._last_error,
        )

    def is_pending(self, todo_id: Optional[str]) -> bool:
        """Check whether a toggle or delete for this todo is in flight."""
        return todo_id in self._pending_ids

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """
        Register a change listener.

        Args:
            callback: Called with the controller after each state change

        Returns:
            Function that removes the listener
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback(self)

    def _index_of(self, todo_id: Optional[str]) -> int:
        for index, record in enumerate(self._records):
            if record.id == todo_id:
                return index
        return -1

    def _fail(self, operation: str, error: TodoClientError) -> None:
        self._last_error = describe_error(operation, error)
        logger.warning(f"Todo {operation} failed: {self._last_error}")

    async def _call(
        self,
        operation: str,
        method: Callable[..., Awaitable[Result[Any]]],
        *args: Any,
    ) -> Result[Any]:
        """
        Await a gateway call, turning any exception it raises into an Err.

        The gateway reports expected failures as Err values; anything it
        raises instead still has to reach the rollback branch.
        """
        try:
            return await method(*args)
        except Exception as e:
            logger.error(f"Todo {operation} raised unexpectedly: {e!r}", exc_info=True)
            return Err(UnexpectedError(e))

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    async def refresh(self) -> None:
        """Replace the local list with the server's current view."""
        self._loading = True
        self._last_error = None
        self._notify()

        try:
            result = await self._call("list", self.gateway.list_todos)
            if isinstance(result, Err):
                self._fail("list", result.error)
            else:
                self._records = list(result.value)
                logger.info(f"Loaded {len(self._records)} todos")
        finally:
            self._loading = False
            self._notify()

    async def add(self, title: str) -> bool:
        """
        Create a todo and append it once the server confirms it.

        Args:
            title: Title as typed; surrounding whitespace is removed

        Returns:
            True if the todo was created, False for a blank title or a failure
        """
        title = title.strip()
        if not title:
            logger.debug("Ignoring add with blank title")
            return False

        self._last_error = None
        self._notify()

        result = await self._call("create", self.gateway.create, title)
        if isinstance(result, Err):
            self._fail("create", result.error)
            self._notify()
            return False

        self._records.append(result.value)
        logger.info(f"Added todo: id={result.value.id}")
        self._notify()
        return True

    async def toggle_done(self, todo_id: str) -> None:
        """
        Flip the completion flag optimistically, rolling back on failure.

        Args:
            todo_id: Identifier of the todo to toggle
        """
        index = self._index_of(todo_id)
        if index == -1:
            logger.debug(f"Toggle ignored, todo not in list: {todo_id}")
            return
        if todo_id in self._pending_ids:
            logger.debug(f"Toggle ignored, mutation in flight: {todo_id}")
            return

        old = self._records[index]
        new_done = not old.done
        self._records[index] = old.with_done(new_done)
        self._last_error = None
        self._pending_ids.add(todo_id)
        self._notify()

        try:
            result = await self._call("update", self.gateway.update, todo_id, new_done)
        finally:
            self._pending_ids.discard(todo_id)

        if isinstance(result, Err):
            current = self._index_of(todo_id)
            if current != -1:
                self._records[current] = old
            self._fail("update", result.error)
        else:
            logger.debug(f"Toggled todo {todo_id}: done={new_done}")
        self._notify()

    async def remove(self, todo_id: str) -> None:
        """
        Remove a todo optimistically, restoring the whole list on failure.

        Any other change made while the delete was in flight is discarded
        by the restore.

        Args:
            todo_id: Identifier of the todo to delete
        """
        index = self._index_of(todo_id)
        if index == -1:
            logger.debug(f"Delete ignored, todo not in list: {todo_id}")
            return
        if todo_id in self._pending_ids:
            logger.debug(f"Delete ignored, mutation in flight: {todo_id}")
            return

        snapshot = list(self._records)
        del self._records[index]
        self._last_error = None
        self._pending_ids.add(todo_id)
        self._notify()

        try:
            result = await self._call("delete", self.gateway.delete, todo_id)
        finally:
            self._pending_ids.discard(todo_id)

        if isinstance(result, Err):
            self._records = snapshot
            self._fail("delete", result.error)
        else:
            logger.info(f"Deleted todo {todo_id}")
        self._notify()
