"""The Todo: terminal client for a remote todo list."""

__version__ = "0.1.0"
