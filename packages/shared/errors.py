"""
Exceptions raised by the note deduplication engine.
"""
from __future__ import annotations

from typing import Any


class NoteDedupError(Exception):
    """Base class for every error the engine raises on purpose."""


class InvalidInputError(NoteDedupError, TypeError):
    """A note entry is not a string. ``index`` is None when the collection itself is wrong."""

    def __init__(self, index: int | None, value: Any = None, message: str | None = None):
        self.index = index
        self.value = value
        if message is None:
            if index is None:
                message = f"Notes must be a list of strings, got {type(value).__name__}"
            else:
                message = f"Note at index {index} is not a string (got {type(value).__name__})"
        super().__init__(message)


class ConfigurationError(NoteDedupError, ValueError):
    """Deduplication config rejected before any processing starts."""
