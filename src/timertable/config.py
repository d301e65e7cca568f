"""
Configuration & Constants
=========================
Central registry for display formats, table columns and key bindings.

Why is this file needed?
------------------------
1. Consistency: the projection, the table widget and the main window all agree
   on column order and sentinel values without importing each other.
2. Options: commands that may prompt or suppress engine hooks receive an
   explicit CommandOptions object instead of reading global flags.

Exports:
    COLUMNS: Ordered table column definitions.
    KEY_BINDINGS: Action name -> keyboard shortcut.
    CommandOptions: Per-invocation options for clone/reschedule/cancel.
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple, Optional


ORG_ID = "timertable"
APP_ID = "timertable"
VISIBLE_APP_NAME = "Timers"

TIME_FORMAT = "%H:%M:%S"
FINISHED_MARKER = "✔"
NOT_FINISHED_MARKER = ""
# Shown for timers without a description
NO_DESCRIPTION = ""


class Column(IntEnum):
    START = 0
    END = 1
    FINISHED = 2
    DESCRIPTION = 3


class ColumnSpec(NamedTuple):
    title: str
    width: Optional[int]  # None -> stretch to remaining width


COLUMNS: dict[Column, ColumnSpec] = {
    Column.START: ColumnSpec("Start", 90),
    Column.END: ColumnSpec("End", 90),
    Column.FINISHED: ColumnSpec("Finished?", 80),
    Column.DESCRIPTION: ColumnSpec("Description", None),
}

KEY_BINDINGS: dict[str, str] = {
    "cancel": "K",
    "remove_finished": "R",
    "add": "+",
    "clone": "C",
    "clone_prompt": "Shift+C",
    "edit_description": "E",
    "reschedule": "S",
    "refresh": "G",
    "close": "Q",
}


@dataclass(frozen=True)
class CommandOptions:
    """Options for commands that may prompt the user or silence engine hooks."""
    prompt_for_description: bool = False
    prompt_for_duration: bool = False
    suppress_hooks: bool = False


CANCEL_OPTIONS = CommandOptions()
CLONE_OPTIONS = CommandOptions()
CLONE_PROMPT_OPTIONS = CommandOptions(prompt_for_description=True, prompt_for_duration=True)
RESCHEDULE_OPTIONS = CommandOptions(prompt_for_description=True, prompt_for_duration=True, suppress_hooks=True)
