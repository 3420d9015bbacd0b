"""UI components for The Todo client."""

from thetodo.ui.components.status_bar import StatusBar
from thetodo.ui.components.todo_list import TodoListView

__all__ = ["StatusBar", "TodoListView"]
