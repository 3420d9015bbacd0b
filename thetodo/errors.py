"""Exception hierarchy for The Todo client."""

from typing import Optional


class TodoClientError(Exception):
    """Base exception for client errors."""
    pass


class ParseError(TodoClientError):
    """Response body did not have the expected todo shape."""
    pass


class ServerError(TodoClientError):
    """Remote store answered with an unexpected HTTP status."""

    def __init__(self, status: int, message: Optional[str] = None):
        super().__init__(message or f"Unexpected HTTP status {status}")
        self.status = status


class TransportError(TodoClientError):
    """Request never produced a response (connection, timeout, DNS)."""

    def __init__(self, cause: BaseException):
        super().__init__(str(cause) or cause.__class__.__name__)
        self.cause = cause


class StorageError(TodoClientError):
    """Durable key-value storage could not be read or written."""
    pass


class UnexpectedError(TodoClientError):
    """Remote call failed with an exception outside the expected failures."""

    def __init__(self, cause: BaseException):
        super().__init__(str(cause) or cause.__class__.__name__)
        self.cause = cause
