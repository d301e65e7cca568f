"""
Error Taxonomy
==============
Exceptions raised by the engine and the command layer.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional


class TimerTableError(Exception):
    """Base class for all errors surfaced to the user."""


class NoSelectionError(TimerTableError):
    """A command needing a timer was invoked with no row under the cursor."""

    def __init__(self, message: str = "No timer selected.") -> None:
        super().__init__(message)


class StaleIdentityError(NoSelectionError):
    """The selected row no longer resolves to a live timer."""

    def __init__(self, identity: Optional[datetime]) -> None:
        super().__init__(f"Timer created at {identity} no longer exists.")
        self.identity = identity


class EngineError(TimerTableError):
    """The timer engine rejected a mutation."""


class InvalidDurationError(TimerTableError, ValueError):
    """User input could not be read as a duration or clock time."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid duration: '{text}'")
        self.text = text
