"""
Tests for the in-memory timer engine.
"""

from datetime import timedelta

import pytest

from timertable.model.engine import InMemoryTimerEngine
from timertable.model.errors import EngineError
from timertable.model.timer import Timer


class TestEngineCollection:
    """Creation, ordering and identity."""

    def test_list_is_ordered_by_creation(self, engine, clock):
        later = engine.create(timedelta(minutes=1), "later")
        clock.now -= timedelta(hours=1)
        earlier = engine.create(timedelta(minutes=1), "earlier")
        assert engine.list_timers() == [earlier, later]

    def test_identities_are_unique_for_equal_timestamps(self, engine):
        timers = [engine.create(timedelta(minutes=1)) for _ in range(3)]
        assert len({t.created for t in timers}) == 3
        assert timers[1].created - timers[0].created == timedelta(microseconds=1)

    def test_create_rejects_non_positive_duration(self, engine):
        with pytest.raises(EngineError):
            engine.create(timedelta(0))

    def test_create_past_latest_time_is_rejected(self, engine):
        with pytest.raises(EngineError):
            engine.create(timedelta(days=999999999))
        assert len(engine) == 0

    def test_empty_description_is_stored_as_none(self, engine):
        assert engine.create(timedelta(minutes=1), "").description is None

    def test_create_emits_hook(self, engine):
        created = []
        engine.timer_created.connect(created.append)
        timer = engine.create(timedelta(minutes=1))
        assert created == [timer]


class TestEngineMutations:
    """Mutations validate that the timer is known."""

    def test_unknown_timer_is_rejected(self, engine, clock):
        stranger = Timer(created=clock.now, end=clock.now + timedelta(minutes=1))
        for call in (engine.cancel, engine.remove, engine.complete,
                     lambda t: engine.set_description(t, "x"), engine.clone):
            with pytest.raises(EngineError):
                call(stranger)

    def test_lookalike_timer_is_rejected(self, engine):
        timer = engine.create(timedelta(minutes=1))
        copy = Timer(created=timer.created, end=timer.end)
        with pytest.raises(EngineError):
            engine.cancel(copy)

    def test_complete_marks_finished_once(self, engine):
        finished = []
        engine.timer_finished.connect(finished.append)
        timer = engine.create(timedelta(minutes=1))

        engine.complete(timer)
        assert timer.finished
        assert finished == [timer]
        with pytest.raises(EngineError):
            engine.complete(timer)

    def test_remove_does_not_run_hooks(self, engine):
        cancelled = []
        engine.timer_cancelled.connect(cancelled.append)
        timer = engine.create(timedelta(minutes=1))
        engine.remove(timer)
        assert len(engine) == 0
        assert cancelled == []

    def test_remove_finished_counts(self, engine, make_timers):
        a, b, c = make_timers("a", "b", "c")
        assert engine.remove_finished() == 0
        engine.complete(b)
        assert engine.remove_finished() == 1
        assert engine.list_timers() == [a, c]

    def test_clone_overrides(self, engine, make_timers):
        (a,) = make_timers("tea", minutes=4)
        assert engine.clone(a).description == "tea"
        assert engine.clone(a, description="").description is None
        assert engine.clone(a, duration=timedelta(hours=1)).duration == timedelta(hours=1)

    def test_clone_of_finished_timer(self, engine, make_timers):
        (a,) = make_timers("tea")
        engine.complete(a)
        new = engine.clone(a)
        assert not new.finished
        assert new.duration == a.duration


class TestEngineExpiry:
    """Expiry with real Qt timers."""

    def test_timer_finishes_on_its_own(self, qapp):
        from PySide6.QtTest import QTest

        engine = InMemoryTimerEngine()
        finished = []
        engine.timer_finished.connect(finished.append)
        timer = engine.create(timedelta(milliseconds=30))

        for _ in range(50):
            if timer.finished:
                break
            QTest.qWait(20)

        assert timer.finished
        assert finished == [timer]

    def test_cancelled_timer_never_finishes(self, qapp):
        from PySide6.QtTest import QTest

        engine = InMemoryTimerEngine()
        timer = engine.create(timedelta(milliseconds=20))
        engine.cancel(timer)
        QTest.qWait(100)
        assert not timer.finished
