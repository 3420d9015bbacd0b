"""
Status bar widget for displaying list state in the UI.

Shows the loading indicator, the most recent error, or the todo counts.
"""

from typing import Optional

from textual.reactive import reactive
from textual.widget import Widget

from thetodo.logging_config import get_logger
from thetodo.models import TodoListState
from thetodo.ui.theme import COMMENT, ERROR_COLOR

logger = get_logger(__name__)


class StatusBar(Widget):
    """
    Shows list status in the UI.

    Displays, in order of precedence:
    - Loading indicator
    - Last error
    - Open/total todo counts
    """

    DEFAULT_CSS = f"""
    StatusBar {{
        height: 1;
        color: {COMMENT};
        padding: 0 1;
    }}

    StatusBar.error {{
        color: {ERROR_COLOR};
    }}
    """

    # Reactive properties auto-refresh on change
    loading: reactive[bool] = reactive(False)
    error: reactive[Optional[str]] = reactive(None)
    total: reactive[int] = reactive(0)
    open_count: reactive[int] = reactive(0)

    def render(self) -> str:
        """Render the status text."""
        if self.loading:
            return "⏳ Loading..."

        if self.error:
            return f"⚠ {self.error}"

        if self.total == 0:
            return "No todos yet. Type one above and press Enter"

        return f"{self.open_count} open / {self.total} total"

    def watch_error(self, error: Optional[str]) -> None:
        """Switch to error styling while an error is shown."""
        self.set_class(bool(error), "error")

    def update_from_state(self, state: TodoListState) -> None:
        """
        Update all fields from a controller snapshot.

        Args:
            state: Current controller state
        """
        self.loading = state.loading
        self.error = state.last_error
        self.total = len(state.records)
        self.open_count = sum(1 for record in state.records if not record.done)
