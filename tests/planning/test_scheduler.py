"""Tests for schedulers and the inline executor."""

import threading

import pytest

from navplan.planning.scheduler import InlineExecutor, ManualScheduler, ThreadingScheduler


class TestManualScheduler:
    """Tests for the clock-driven scheduler."""

    def test_runs_when_due(self) -> None:
        """Callbacks run once the clock reaches their due time."""
        scheduler = ManualScheduler()
        calls = []
        scheduler.schedule(0.5, lambda: calls.append("a"))

        assert scheduler.advance(0.49) == 0
        assert scheduler.advance(0.01) == 1
        assert calls == ["a"]
        assert scheduler.advance(10) == 0

    def test_cancel(self) -> None:
        """Cancelled calls never run."""
        scheduler = ManualScheduler()
        calls = []
        call = scheduler.schedule(0.5, lambda: calls.append("a"))
        call.cancel()

        assert call.cancelled
        assert scheduler.pending == 0
        scheduler.advance(1.0)
        assert calls == []

    def test_due_order(self) -> None:
        """Calls due in the same advance run in due order."""
        scheduler = ManualScheduler()
        calls = []
        scheduler.schedule(0.3, lambda: calls.append("late"))
        scheduler.schedule(0.1, lambda: calls.append("early"))
        scheduler.advance(1.0)
        assert calls == ["early", "late"]


class TestThreadingScheduler:
    """Tests for the timer-backed scheduler."""

    def test_runs_callback(self) -> None:
        """The callback runs on a timer thread."""
        done = threading.Event()
        ThreadingScheduler().schedule(0.01, done.set)
        assert done.wait(2.0)

    def test_cancel(self) -> None:
        """A cancelled timer does not fire."""
        fired = threading.Event()
        call = ThreadingScheduler().schedule(0.2, fired.set)
        call.cancel()
        assert call.cancelled
        assert not fired.wait(0.4)


class TestInlineExecutor:
    """Tests for InlineExecutor."""

    def test_result(self) -> None:
        """Tasks complete before submit returns."""
        future = InlineExecutor().submit(lambda a, b: a + b, 2, b=3)
        assert future.done()
        assert future.result() == 5

    def test_exception(self) -> None:
        """Exceptions are stored on the future."""
        future = InlineExecutor().submit(lambda: 1 / 0)
        with pytest.raises(ZeroDivisionError):
            future.result()
