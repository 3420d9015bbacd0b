"""Rendering of a single todo as a row of the todo list.

A row shows:
- Completion checkbox ([✓] done, [ ] open)
- Title, struck through when done
- Busy marker while a toggle or delete for the todo is in flight
"""

from rich.text import Text

from thetodo.models import TodoRecord
from thetodo.ui.theme import ACCENT, COMPLETE_COLOR, FOREGROUND, PENDING_COLOR

PENDING_MARKER = " ⏳"


def render_todo(record: TodoRecord, pending: bool = False) -> Text:
    """Render a todo as Rich Text.

    Args:
        record: Todo to render
        pending: Whether a mutation for this todo awaits the server

    Returns:
        Rich Text for the row
    """
    text = Text()

    if record.done:
        text.append("[✓] ", style=COMPLETE_COLOR)
        text.append(record.title, style=f"strike {COMPLETE_COLOR}")
    else:
        text.append("[ ] ", style=FOREGROUND)
        text.append(record.title, style=ACCENT)

    if pending:
        text.append(PENDING_MARKER, style=PENDING_COLOR)

    return text
