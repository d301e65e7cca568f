"""
Timer Data Model
================
Defines the Timer record and the interface every timer engine must provide.

Classes:
    Timer: One timer; its creation timestamp is its identity.
    TimerEngine: Protocol for the owner of the timer collection.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Protocol, Sequence


@dataclass
class Timer:
    created: datetime
    end: datetime
    finished: bool = False
    description: Optional[str] = None

    @property
    def identity(self) -> datetime:
        return self.created

    @property
    def duration(self) -> timedelta:
        return self.end - self.created


class TimerEngine(Protocol):
    """
    Owner of the canonical timer collection.

    list_timers() returns a snapshot ordered by creation time (ascending).
    Mutations raise EngineError on invalid transitions.
    """

    def list_timers(self) -> Sequence[Timer]: ...

    def get(self, identity: datetime) -> Optional[Timer]: ...

    def create(self, duration: timedelta, description: Optional[str] = None) -> Timer: ...

    def cancel(self, timer: Timer, suppress_hooks: bool = False) -> None: ...

    def remove(self, timer: Timer) -> None: ...

    def remove_finished(self) -> int: ...

    def clone(self, timer: Timer, description: Optional[str] = None,
              duration: Optional[timedelta] = None) -> Timer: ...

    def set_description(self, timer: Timer, text: Optional[str]) -> None: ...
