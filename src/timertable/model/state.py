"""
View State
==========
Holds the rows currently on screen and the identity of the selected timer.

Why is this file needed?
------------------------
1. Decoupling: the selection is a timer identity, not a table row index, so it
   survives re-sorting and full re-projection.
2. Resolution: commands act on Timers, so the selected row is resolved back to
   the engine's authoritative record right before a mutation.

Classes:
    ViewState: Rows + selected identity over an injected TimerEngine.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional

from timertable.model.rows import Row, project
from timertable.model.timer import Timer, TimerEngine

logger = logging.getLogger(__name__)


class ViewState:
    def __init__(self, engine: TimerEngine) -> None:
        self.engine = engine
        self.rows: List[Row] = []
        self.selected: Optional[datetime] = None
        self._index: Dict[datetime, Row] = {}

    def refresh(self) -> List[Row]:
        """Re-project every timer and replace the stored rows. Selection is left as is."""
        self.rows = project(self.engine.list_timers())
        self._index = {row.identity: row for row in self.rows}
        logger.debug(f"View refreshed: {len(self.rows)} row(s).")
        return self.rows

    def row_at(self, identity: Optional[datetime]) -> Optional[Row]:
        if identity is None:
            return None
        return self._index.get(identity)

    def lookup_timer(self, identity: Optional[datetime]) -> Optional[Timer]:
        if identity is None:
            return None
        return self.engine.get(identity)

    def identities(self) -> List[datetime]:
        return [row.identity for row in self.rows]

    def select(self, identity: Optional[datetime]) -> None:
        self.selected = identity
