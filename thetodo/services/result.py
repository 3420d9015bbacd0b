"""
Explicit outcome of a remote call.

The gateway returns ``Ok(value)`` or ``Err(error)`` instead of raising,
so callers apply or roll back local changes with a plain branch.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from thetodo.errors import TodoClientError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the call's value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying one of ParseError, ServerError or TransportError."""

    error: TodoClientError

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]
