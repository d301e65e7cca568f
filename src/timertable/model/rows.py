"""
Row Projection
==============
Maps the engine's timer collection onto display rows.

project() is pure: it neither sorts nor filters, and the same input always
yields equal rows. Sorting belongs to the table widget.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, List, Tuple

from timertable.config import (
    Column, TIME_FORMAT, FINISHED_MARKER, NOT_FINISHED_MARKER, NO_DESCRIPTION
)
from timertable.model.timer import Timer


@dataclass(frozen=True)
class Row:
    identity: datetime
    start: str
    end: str
    finished: str
    description: str
    # Raw values for chronological rather than lexical sorting
    end_key: datetime
    finished_key: bool

    def cells(self) -> Tuple[str, str, str, str]:
        return self.start, self.end, self.finished, self.description

    def sort_key(self, column: Column) -> Any:
        if column == Column.START:
            return self.identity
        if column == Column.END:
            return self.end_key
        if column == Column.FINISHED:
            return self.finished_key
        return self.description.casefold()


def project_timer(timer: Timer) -> Row:
    return Row(
        identity=timer.created,
        start=timer.created.strftime(TIME_FORMAT),
        end=timer.end.strftime(TIME_FORMAT),
        finished=FINISHED_MARKER if timer.finished else NOT_FINISHED_MARKER,
        description=timer.description or NO_DESCRIPTION,
        end_key=timer.end,
        finished_key=timer.finished,
    )


def project(timers: Iterable[Timer]) -> List[Row]:
    """One Row per Timer, in input order."""
    return [project_timer(t) for t in timers]
