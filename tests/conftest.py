"""
Pytest configuration and fixtures for timertable tests.
"""

import os
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

# Widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class FakeClock:
    """Deterministic clock; call advance() to move time forward."""

    def __init__(self, start=None):
        self.now = start or datetime(2026, 3, 14, 9, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeRenderer:
    """Keeps rows in creation order (or reversed) and tracks the selection."""

    def __init__(self, reverse=False):
        self.reverse = reverse
        self.rows = []
        self.selected = None
        self.replace_count = 0

    def replace_rows(self, rows):
        self.rows = sorted(rows, key=lambda r: r.identity, reverse=self.reverse)
        self.replace_count += 1

    def select_identity(self, identity):
        if identity in self.displayed_identities():
            self.selected = identity
            return True
        return False

    def select_default(self):
        self.selected = self.rows[0].identity if self.rows else None
        return self.selected

    def displayed_identities(self):
        return [r.identity for r in self.rows]


class FakePrompter:
    """Answers prompts from queues; None in a queue means the user cancelled."""

    def __init__(self, durations=(), descriptions=()):
        self.durations = list(durations)
        self.descriptions = list(descriptions)
        self.asked = []

    def ask_duration(self, default=None):
        self.asked.append(("duration", default))
        return self.durations.pop(0)

    def ask_description(self, default=None):
        self.asked.append(("description", default))
        return self.descriptions.pop(0)


@pytest.fixture(scope="session")
def qapp():
    """Single QApplication shared by all widget tests."""
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(clock):
    """Engine without expiry timers; tests finish timers via complete()."""
    from timertable.model.engine import InMemoryTimerEngine
    return InMemoryTimerEngine(clock=clock, schedule_expiry=False)


@pytest.fixture
def make_timers(engine, clock):
    """Create timers one second apart, returning them in creation order."""
    def _make(*descriptions, minutes=5):
        timers = []
        for desc in descriptions:
            timers.append(engine.create(timedelta(minutes=minutes), desc))
            clock.advance(seconds=1)
        return timers
    return _make


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def prompter():
    return FakePrompter()


@pytest.fixture
def state(engine):
    from timertable.model.state import ViewState
    return ViewState(engine)


@pytest.fixture
def dispatcher(state, renderer, prompter):
    from timertable.controller.commands import CommandDispatcher
    return CommandDispatcher(state, renderer, prompter)
