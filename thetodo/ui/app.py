"""Main Textual application for The Todo client.

Layout:
- Input line for new todos (Enter adds; the text stays until the server confirms)
- Todo list (Space toggles, Delete removes the highlighted todo)
- Status bar (loading, last error, counts)

Every user intent is handed to the TodoListController as a worker on the
app's event loop, so several requests can be in flight while the list
stays responsive. The view re-renders on controller change notifications.
"""

from typing import Callable, Optional

from textual.app import App, ComposeResult
from textual.css.query import NoMatches
from textual.widgets import Footer, Input

from thetodo.bootstrap import ClientServices, build_services
from thetodo.config import Config
from thetodo.logging_config import get_logger
from thetodo.services.todo_controller import TodoListController
from thetodo.ui.components.status_bar import StatusBar
from thetodo.ui.components.todo_list import TodoListView
from thetodo.ui.constants import (
    APP_TITLE,
    MUTATION_WORKER_GROUP,
    NEW_TODO_INPUT_ID,
    NOTIFICATION_TIMEOUT_MEDIUM,
    REFRESH_WORKER_GROUP,
    STATUS_BAR_ID,
    TODO_LIST_ID,
)
from thetodo.ui.keybindings import get_app_bindings
from thetodo.ui.theme import ACCENT, BACKGROUND, BORDER, FOREGROUND

# Initialize logger for this module
logger = get_logger(__name__)


class TheTodoApp(App):
    """Terminal client for the remote todo list."""

    CSS = f"""
    Screen {{
        background: {BACKGROUND};
        color: {FOREGROUND};
    }}

    #{NEW_TODO_INPUT_ID} {{
        border: solid {BORDER};
        margin: 1 1 0 1;
    }}

    #{NEW_TODO_INPUT_ID}:focus {{
        border: thick {ACCENT};
    }}

    #{TODO_LIST_ID} {{
        margin: 0 1;
    }}
    """

    BINDINGS = get_app_bindings()

    # ==============================================================================
    # LIFECYCLE METHODS
    # ==============================================================================

    def __init__(
        self,
        config: Optional[Config] = None,
        controller: Optional[TodoListController] = None,
        **kwargs,
    ) -> None:
        """Initialize the application.

        Args:
            config: Configuration used to build services when no controller is given
            controller: Preconfigured controller; the caller keeps ownership of its gateway
        """
        super().__init__(**kwargs)
        self.title = APP_TITLE
        self._config = config
        self._controller: Optional[TodoListController] = controller
        self._services: Optional[ClientServices] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._shown_error: Optional[str] = None

    @property
    def controller(self) -> Optional[TodoListController]:
        return self._controller

    def compose(self) -> ComposeResult:
        """Compose the application layout.

        Yields:
            Widgets that make up the application
        """
        yield Input(placeholder="What needs to be done?", id=NEW_TODO_INPUT_ID)
        yield TodoListView(id=TODO_LIST_ID)
        yield StatusBar(id=STATUS_BAR_ID)
        yield Footer()

    async def on_mount(self) -> None:
        """Build services if needed, then load the list from the server."""
        logger.info("The Todo application mounted, initializing...")

        if self._controller is None:
            self._services = await build_services(self._config)
            self._controller = self._services.controller

        self._unsubscribe = self._controller.subscribe(self._on_controller_change)
        self._render_state()
        self.query_one(f"#{NEW_TODO_INPUT_ID}", Input).focus()

        self.action_refresh()
        logger.info("The Todo application ready")

    async def on_unmount(self) -> None:
        """Detach from the controller and release owned resources."""
        logger.info("The Todo application shutting down")
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._services is not None:
            await self._services.close()
            self._services = None
        logger.info("The Todo application shutdown complete")

    # ==============================================================================
    # EVENT HANDLERS
    # ==============================================================================

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Create a todo from the input line."""
        if event.input.id != NEW_TODO_INPUT_ID or self._controller is None:
            return
        if not event.value.strip():
            return
        self.run_worker(self._add_todo(event.value), group=MUTATION_WORKER_GROUP)

    def on_todo_list_view_toggle_requested(self, message: TodoListView.ToggleRequested) -> None:
        """Toggle the requested todo."""
        if self._controller is None or self._controller.is_pending(message.todo_id):
            return
        self.run_worker(self._controller.toggle_done(message.todo_id), group=MUTATION_WORKER_GROUP)

    def on_todo_list_view_delete_requested(self, message: TodoListView.DeleteRequested) -> None:
        """Delete the requested todo."""
        if self._controller is None or self._controller.is_pending(message.todo_id):
            return
        self.run_worker(self._controller.remove(message.todo_id), group=MUTATION_WORKER_GROUP)

    # ==============================================================================
    # ACTION HANDLERS
    # ==============================================================================

    def action_refresh(self) -> None:
        """Reload the list from the server (Ctrl+R)."""
        if self._controller is None or self._controller.loading:
            logger.debug("Refresh skipped: controller busy or missing")
            return
        self.run_worker(self._controller.refresh(), group=REFRESH_WORKER_GROUP)

    def action_focus_input(self) -> None:
        """Move focus to the new-todo input (Ctrl+N)."""
        self.query_one(f"#{NEW_TODO_INPUT_ID}", Input).focus()

    # ==============================================================================
    # PRIVATE HELPERS
    # ==============================================================================

    async def _add_todo(self, title: str) -> None:
        """Add a todo and clear the input only once the server confirms it."""
        if await self._controller.add(title):
            todo_input = self.query_one(f"#{NEW_TODO_INPUT_ID}", Input)
            if todo_input.value == title:
                todo_input.value = ""

    def _on_controller_change(self, controller: TodoListController) -> None:
        self._render_state()

    def _render_state(self) -> None:
        """Push the controller's current state into the widgets."""
        state = self._controller.state
        pending_ids = {
            record.id for record in state.records
            if record.id is not None and self._controller.is_pending(record.id)
        }

        try:
            todo_list = self.query_one(f"#{TODO_LIST_ID}", TodoListView)
            status_bar = self.query_one(f"#{STATUS_BAR_ID}", StatusBar)
        except NoMatches:
            # Late completion while the app is shutting down
            return

        todo_list.set_todos(state.records, pending_ids)
        status_bar.update_from_state(state)

        if state.last_error and state.last_error != self._shown_error:
            self.notify(state.last_error, severity="error", timeout=NOTIFICATION_TIMEOUT_MEDIUM)
        self._shown_error = state.last_error
