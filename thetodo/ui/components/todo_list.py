"""Todo list widget.

Displays the controller's records and turns key presses on the highlighted
row into toggle/delete requests for the app to dispatch.
"""

from typing import List, Optional, Sequence, Set

from textual.message import Message
from textual.widgets import OptionList

from thetodo.logging_config import get_logger
from thetodo.models import TodoRecord
from thetodo.ui.components.todo_item import render_todo
from thetodo.ui.keybindings import get_todo_list_bindings
from thetodo.ui.theme import ACCENT, BORDER, HOVER_OPACITY, SELECTION, with_alpha

logger = get_logger(__name__)


class TodoListView(OptionList):
    """Scrollable list of todos with a highlighted row."""

    DEFAULT_CSS = f"""
    TodoListView {{
        height: 1fr;
        border: solid {BORDER};
    }}

    TodoListView:focus {{
        border: thick {ACCENT};
    }}

    TodoListView > .option-list--option-highlighted {{
        background: {SELECTION};
    }}

    TodoListView > .option-list--option-hover {{
        background: {with_alpha(SELECTION, HOVER_OPACITY)};
    }}
    """

    BINDINGS = get_todo_list_bindings()

    def __init__(self, **kwargs) -> None:
        """Initialize an empty todo list.

        Args:
            **kwargs: Additional keyword arguments for OptionList
        """
        super().__init__(**kwargs)
        self._todo_ids: List[Optional[str]] = []

    @property
    def todo_ids(self) -> List[Optional[str]]:
        """Identifiers of the displayed todos, in display order."""
        return list(self._todo_ids)

    def set_todos(self, records: Sequence[TodoRecord], pending_ids: Set[str]) -> None:
        """Replace the displayed rows, keeping the highlight on the same todo if possible.

        Args:
            records: Todos in display order
            pending_ids: Identifiers with a mutation in flight
        """
        highlighted_id = self.highlighted_todo_id
        old_index = self.highlighted

        self.clear_options()
        self._todo_ids = [record.id for record in records]
        self.add_options([render_todo(record, record.id in pending_ids) for record in records])

        if not self._todo_ids:
            return
        if highlighted_id is not None and highlighted_id in self._todo_ids:
            self.highlighted = self._todo_ids.index(highlighted_id)
        else:
            self.highlighted = min(old_index or 0, len(self._todo_ids) - 1)

    @property
    def highlighted_todo_id(self) -> Optional[str]:
        """Identifier of the highlighted todo, or None."""
        index = self.highlighted
        if index is None or not 0 <= index < len(self._todo_ids):
            return None
        return self._todo_ids[index]

    def action_toggle_done(self) -> None:
        """Request a completion toggle for the highlighted todo."""
        todo_id = self.highlighted_todo_id
        if todo_id is None:
            logger.debug("Toggle pressed with no highlighted todo")
            return
        self.post_message(self.ToggleRequested(todo_id))

    def action_delete_todo(self) -> None:
        """Request deletion of the highlighted todo."""
        todo_id = self.highlighted_todo_id
        if todo_id is None:
            logger.debug("Delete pressed with no highlighted todo")
            return
        self.post_message(self.DeleteRequested(todo_id))

    class ToggleRequested(Message):
        """Message emitted when the user asks to toggle a todo."""

        def __init__(self, todo_id: str) -> None:
            super().__init__()
            self.todo_id = todo_id

    class DeleteRequested(Message):
        """Message emitted when the user asks to delete a todo."""

        def __init__(self, todo_id: str) -> None:
            super().__init__()
            self.todo_id = todo_id
