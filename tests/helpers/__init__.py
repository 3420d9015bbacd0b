"""Test helper utilities for The Todo tests."""

from tests.helpers.fakes import (
    TEST_BASE_URL,
    TEST_USER_ID,
    FakeGateway,
    InMemoryTodoServer,
    RecordingHandler,
    settle,
)

__all__ = [
    "TEST_BASE_URL",
    "TEST_USER_ID",
    "FakeGateway",
    "InMemoryTodoServer",
    "RecordingHandler",
    "settle",
]
