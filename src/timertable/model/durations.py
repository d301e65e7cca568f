"""
Duration Input Parsing
Turns user input ("5", "90s", "1.5h", "14:30") into a timedelta from now.
"""
from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Optional

from timertable.model.errors import InvalidDurationError

_RELATIVE_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*([smh]?)$", re.IGNORECASE)
_ABSOLUTE_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

_UNIT_SECONDS = {"s": 1, "m": 60, "": 60, "h": 3600}


def parse_duration(text: str, now: Optional[datetime] = None) -> timedelta:
    """
    Parse a duration relative to 'now'.

    A bare number is minutes; 's', 'm' and 'h' suffixes select the unit.
    'HH:MM' is an absolute clock time: today, or tomorrow if already past.
    """
    value = text.strip()
    m = _RELATIVE_RE.match(value)
    if m:
        seconds = float(m.group(1)) * _UNIT_SECONDS[m.group(2).lower()]
        if seconds <= 0:
            raise InvalidDurationError(text)
        try:
            delta = timedelta(seconds=seconds)
        except (OverflowError, ValueError):
            raise InvalidDurationError(text) from None
        # The end time must still be representable
        if delta > datetime.max - (now or datetime.now()):
            raise InvalidDurationError(text)
        return delta

    m = _ABSOLUTE_RE.match(value)
    if m:
        hour, minute = int(m.group(1)), int(m.group(2))
        if hour > 23 or minute > 59:
            raise InvalidDurationError(text)
        now = now or datetime.now()
        target = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
        if target <= now:
            target += timedelta(days=1)
        return target - now

    raise InvalidDurationError(text)


def format_duration(delta: timedelta) -> str:
    """Inverse of parse_duration for prompt defaults (e.g. '90s', '5m', '2h')."""
    seconds = int(round(delta.total_seconds()))
    if seconds % 3600 == 0:
        return f"{seconds // 3600}h"
    if seconds % 60 == 0:
        return f"{seconds // 60}m"
    return f"{seconds}s"
