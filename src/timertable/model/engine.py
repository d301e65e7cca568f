"""
In-Memory Timer Engine
======================
Owns the canonical timer collection for a running session.

Why is this file needed?
------------------------
1. Ownership: the table view never mutates timers directly; every change goes
   through one engine instance injected by main.py.
2. Hooks: creation, cancellation and completion are published as Qt Signals.
   Cancellation may suppress its hook (used by reschedule).
3. Expiry: each running timer owns a single-shot QTimer on the UI thread which
   marks it finished when it fires.

Timer identity is the creation timestamp. The engine keeps it unique by bumping
a colliding timestamp forward one microsecond at a time.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from PySide6.QtCore import QObject, Qt, QTimer, Signal

from timertable.model.errors import EngineError
from timertable.model.timer import Timer

logger = logging.getLogger(__name__)

# QTimer intervals are signed 32-bit milliseconds
_MAX_INTERVAL_MS = 2**31 - 1
_RESOLUTION = timedelta(microseconds=1)


class InMemoryTimerEngine(QObject):
    """Timer collection with Qt signals as engine hooks."""
    timer_created = Signal(object)
    timer_cancelled = Signal(object)
    timer_finished = Signal(object)

    def __init__(self, clock: Optional[Callable[[], datetime]] = None, schedule_expiry: bool = True) -> None:
        super().__init__()
        self._clock = clock or datetime.now
        self._schedule_expiry = schedule_expiry
        self._timers: Dict[datetime, Timer] = {}
        self._expiry: Dict[datetime, QTimer] = {}

    # --- QUERIES ---

    def list_timers(self) -> List[Timer]:
        return [self._timers[key] for key in sorted(self._timers)]

    def get(self, identity: datetime) -> Optional[Timer]:
        return self._timers.get(identity)

    def __len__(self) -> int:
        return len(self._timers)

    # --- MUTATIONS ---

    def create(self, duration: timedelta, description: Optional[str] = None) -> Timer:
        if duration <= timedelta(0):
            raise EngineError(f"Duration must be positive, got {duration}.")

        created = self._unique_timestamp()
        try:
            end = created + duration
        except OverflowError:
            raise EngineError(f"Duration {duration} ends past the latest representable time.") from None
        timer = Timer(created=created, end=end, description=description or None)
        self._timers[created] = timer
        self._start_expiry(timer)

        logger.info(f"Created timer {created:%H:%M:%S.%f} ending at {timer.end:%H:%M:%S}")
        self.timer_created.emit(timer)
        return timer

    def cancel(self, timer: Timer, suppress_hooks: bool = False) -> None:
        self._require(timer)
        self._stop_expiry(timer)
        del self._timers[timer.created]

        logger.info(f"Cancelled timer {timer.created:%H:%M:%S.%f} (hooks {'off' if suppress_hooks else 'on'})")
        if not suppress_hooks:
            self.timer_cancelled.emit(timer)

    def remove(self, timer: Timer) -> None:
        self._require(timer)
        self._stop_expiry(timer)
        del self._timers[timer.created]
        logger.debug(f"Removed timer {timer.created:%H:%M:%S.%f}")

    def remove_finished(self) -> int:
        finished = [t for t in self._timers.values() if t.finished]
        for timer in finished:
            del self._timers[timer.created]
        logger.info(f"Removed {len(finished)} finished timer(s).")
        return len(finished)

    def clone(self, timer: Timer, description: Optional[str] = None,
              duration: Optional[timedelta] = None) -> Timer:
        """
        Start a new timer with the same duration and description as 'timer'.

        Args:
            timer: Source timer (running or finished).
            description: Replacement description; None keeps the source's.
            duration: Replacement duration; None keeps the source's.
        """
        self._require(timer)
        new_description = timer.description if description is None else description
        return self.create(duration or timer.duration, new_description)

    def set_description(self, timer: Timer, text: Optional[str]) -> None:
        self._require(timer)
        timer.description = text or None
        logger.debug(f"Description of {timer.created:%H:%M:%S.%f} set to {timer.description!r}")

    def complete(self, timer: Timer) -> None:
        """Mark a running timer as finished and fire the completion hook."""
        self._require(timer)
        if timer.finished:
            raise EngineError(f"Timer created at {timer.created:%H:%M:%S} has already finished.")
        self._stop_expiry(timer)
        timer.finished = True

        logger.info(f"Timer {timer.created:%H:%M:%S.%f} finished.")
        self.timer_finished.emit(timer)

    # --- HELPERS ---

    def _require(self, timer: Timer) -> None:
        if self._timers.get(timer.created) is not timer:
            raise EngineError(f"Timer created at {timer.created:%H:%M:%S.%f} is not known to the engine.")

    def _unique_timestamp(self) -> datetime:
        created = self._clock()
        while created in self._timers:
            created += _RESOLUTION
        return created

    def _start_expiry(self, timer: Timer) -> None:
        if not self._schedule_expiry:
            return
        remaining_ms = (timer.end - self._clock()).total_seconds() * 1000.0
        qtimer = QTimer(self)
        qtimer.setSingleShot(True)
        qtimer.setTimerType(Qt.PreciseTimer)
        qtimer.setInterval(int(min(max(remaining_ms, 0.0), _MAX_INTERVAL_MS)))
        qtimer.timeout.connect(lambda t=timer: self._on_expired(t))
        self._expiry[timer.created] = qtimer
        qtimer.start()

    def _stop_expiry(self, timer: Timer) -> None:
        qtimer = self._expiry.pop(timer.created, None)
        if qtimer is not None:
            qtimer.stop()
            qtimer.deleteLater()

    def _on_expired(self, timer: Timer) -> None:
        if self._timers.get(timer.created) is not timer or timer.finished:
            return
        if self._clock() < timer.end:
            # Interval was capped, wait for the remainder
            self._stop_expiry(timer)
            self._start_expiry(timer)
            return
        self.complete(timer)
