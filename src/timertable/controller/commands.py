"""
Table Commands
==============
User-invocable operations on the timer under the cursor.

Every command follows the same sequence: resolve the selection to a Timer,
call the engine, re-project the whole table and restore the selection by
identity. Engine errors propagate unchanged and leave the table as it was.

Classes:
    Renderer: What the dispatcher needs from the table widget.
    Prompter: What the dispatcher needs to ask the user for input.
    CommandDispatcher: cancel / remove finished / add / clone / reschedule /
        edit description.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional, Protocol, Sequence

from timertable.config import (
    CommandOptions, CANCEL_OPTIONS, CLONE_OPTIONS, RESCHEDULE_OPTIONS
)
from timertable.controller.cursor import CursorStabilizer
from timertable.model.durations import parse_duration, format_duration
from timertable.model.errors import NoSelectionError, StaleIdentityError
from timertable.model.rows import Row
from timertable.model.state import ViewState
from timertable.model.timer import Timer

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def replace_rows(self, rows: Sequence[Row]) -> None: ...

    def select_identity(self, identity: datetime) -> bool: ...

    def select_default(self) -> Optional[datetime]: ...

    def displayed_identities(self) -> List[datetime]: ...


class Prompter(Protocol):
    """Both methods return None when the user cancels."""

    def ask_duration(self, default: Optional[str] = None) -> Optional[str]: ...

    def ask_description(self, default: Optional[str] = None) -> Optional[str]: ...


class CommandDispatcher:
    def __init__(self, state: ViewState, renderer: Renderer, prompter: Prompter,
                 stabilizer: Optional[CursorStabilizer] = None) -> None:
        self.state = state
        self.renderer = renderer
        self.prompter = prompter
        self.stabilizer = stabilizer or CursorStabilizer()

    @property
    def engine(self):
        return self.state.engine

    # --- COMMANDS ---

    def refresh_view(self) -> Optional[datetime]:
        """Redraw without mutating; keeps the selection if it still exists."""
        return self._render(self.state.selected)

    def cancel(self, options: CommandOptions = CANCEL_OPTIONS) -> Optional[datetime]:
        """Cancel the selected timer and move the cursor to its neighbour."""
        timer = self._selected_timer()
        old_order = self.renderer.displayed_identities()
        target = self.stabilizer.neighbor(old_order, timer.identity)

        self.engine.cancel(timer, suppress_hooks=options.suppress_hooks)
        logger.info(f"Cancelled timer {timer.identity:%H:%M:%S}; cursor target {target}")
        return self._render(target, old_order)

    def remove_finished(self) -> int:
        # Several rows may vanish at once, so no neighbour stabilization here
        removed = self.engine.remove_finished()
        self._render(self.state.selected)
        return removed

    def add(self, duration: Optional[str] = None, description: Optional[str] = None) -> Optional[Timer]:
        if duration is None:
            duration = self.prompter.ask_duration()
            if duration is None:
                return None
            description = self.prompter.ask_description()
            if description is None:
                return None

        timer = self.engine.create(parse_duration(duration), description or None)
        self._render(None)
        return timer

    def clone(self, options: CommandOptions = CLONE_OPTIONS) -> Optional[Timer]:
        timer = self._selected_timer()
        new_timer = self._clone(timer, options)
        if new_timer is None:
            return None
        self._render(None)
        return new_timer

    def reschedule(self, options: CommandOptions = RESCHEDULE_OPTIONS) -> Optional[Timer]:
        """Clone the selected timer, then cancel the original without running hooks."""
        timer = self._selected_timer()
        new_timer = self._clone(timer, options)
        if new_timer is None:
            return None
        self.engine.cancel(timer, suppress_hooks=True)
        logger.info(f"Rescheduled {timer.identity:%H:%M:%S} as {new_timer.identity:%H:%M:%S}")
        self._render(None)
        return new_timer

    def edit_description(self, text: Optional[str] = None) -> bool:
        timer = self._selected_timer()
        if text is None:
            text = self.prompter.ask_description(timer.description or "")
            if text is None:
                return False

        self.engine.set_description(timer, text)
        self._render(timer.identity)
        return True

    # --- HELPERS ---

    def _selected_timer(self) -> Timer:
        identity = self.state.selected
        if identity is None:
            raise NoSelectionError()
        timer = self.state.lookup_timer(identity)
        if timer is None:
            raise StaleIdentityError(identity)
        return timer

    def _clone(self, timer: Timer, options: CommandOptions) -> Optional[Timer]:
        duration = None
        if options.prompt_for_duration:
            default = format_duration(timer.duration)
            text = self.prompter.ask_duration(default)
            if text is None:
                return None
            # An untouched default keeps the exact original duration
            duration = timer.duration if text.strip() == default else parse_duration(text)

        description = None
        if options.prompt_for_description and timer.description:
            description = self.prompter.ask_description(timer.description)
            if description is None:
                return None

        return self.engine.clone(timer, description=description, duration=duration)

    def _render(self, target: Optional[datetime],
                old_order: Optional[Sequence[datetime]] = None) -> Optional[datetime]:
        rows = self.state.refresh()
        self.renderer.replace_rows(rows)

        surviving = set(self.state.identities())
        if old_order:
            chosen = self.stabilizer.resolve(old_order, surviving, target)
        else:
            chosen = target if target in surviving else None

        if chosen is not None and self.renderer.select_identity(chosen):
            self.state.select(chosen)
        else:
            self.state.select(self.renderer.select_default())
        return self.state.selected
