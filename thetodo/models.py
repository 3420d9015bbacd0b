"""
Pydantic models for The Todo client.

Defines the todo entity held in the local list and the read-only
snapshot of the list controller's state.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


class TodoRecord(BaseModel):
    """
    A single todo item as known to the client.

    The identifier is assigned by the remote store; it is None only for a
    record the store has not acknowledged. Records are immutable, so a
    toggle produces a new instance rather than mutating the old one.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = Field(default=None, description="Server-assigned identifier")
    title: StrictStr = Field(..., description="Display title")
    done: StrictBool = Field(default=False, description="Whether the todo is completed")

    def with_done(self, done: bool) -> "TodoRecord":
        """
        Return a copy of this record with a new completion flag.

        Args:
            done: New completion state

        Returns:
            New TodoRecord sharing id and title
        """
        return self.model_copy(update={"done": done})


class TodoListState(BaseModel):
    """Immutable snapshot of the list controller's observable state."""

    model_config = ConfigDict(frozen=True)

    records: Tuple[TodoRecord, ...] = ()
    loading: bool = False
    last_error: Optional[str] = None
