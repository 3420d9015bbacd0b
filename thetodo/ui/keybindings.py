"""Keybindings for The Todo front end.

Todo actions are bound on the list widget so they only fire while the list
has focus; typing in the input line never toggles or deletes anything.
"""

from textual.binding import Binding


# Todo action keybindings (list widget)
TODO_ACTION_BINDINGS = [
    Binding("space", "toggle_done", "Toggle Done", show=True),
    Binding("delete", "delete_todo", "Delete", show=True),
]

# Application control keybindings
APP_CONTROL_BINDINGS = [
    Binding("ctrl+r", "refresh", "Refresh", show=True),
    Binding("ctrl+n", "focus_input", "New Todo", show=True),
    Binding("ctrl+q", "quit", "Quit", priority=True, show=True),
]


def get_app_bindings() -> list[Binding]:
    """Get the application-level keybindings.

    Returns:
        List of Binding objects handled by the app
    """
    return list(APP_CONTROL_BINDINGS)


def get_todo_list_bindings() -> list[Binding]:
    """Get the keybindings handled by the todo list widget.

    Returns:
        List of Binding objects handled by the list
    """
    return list(TODO_ACTION_BINDINGS)
