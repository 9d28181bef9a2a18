"""Deferred-call scheduling and executors for the orchestrator.

The orchestrator never sleeps or starts timers itself; it asks a Scheduler
to call it back later. Production code uses :class:`ThreadingScheduler`.
Hosts with their own event loop, and tests, drive a :class:`ManualScheduler`
by advancing its clock.
"""

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from concurrent.futures import Executor, Future
from typing import Any

from navplan.core.logging_system import get_logger

logger = get_logger(__name__)


class ScheduledCall(ABC):
    """Handle on a pending deferred call."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the call from running. No effect once it has run."""

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        """True once cancel() has been called."""


class Scheduler(ABC):
    """Port for running a callback after a delay."""

    @abstractmethod
    def schedule(self, delay_s: float, callback: Callable[[], None]) -> ScheduledCall:
        """Run callback once after delay_s seconds."""


class _TimerCall(ScheduledCall):
    def __init__(self, timer: threading.Timer) -> None:
        self._timer = timer
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        self._timer.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ThreadingScheduler(Scheduler):
    """Scheduler backed by daemon ``threading.Timer`` threads."""

    def schedule(self, delay_s: float, callback: Callable[[], None]) -> ScheduledCall:
        timer = threading.Timer(delay_s, callback)
        timer.daemon = True
        timer.start()
        return _TimerCall(timer)


class _ManualCall(ScheduledCall):
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """Scheduler driven by an explicit clock.

    Nothing runs until :meth:`advance` moves the clock past a call's due time.

    Examples:
        >>> scheduler = ManualScheduler()
        >>> calls = []
        >>> _ = scheduler.schedule(0.5, lambda: calls.append("run"))
        >>> scheduler.advance(0.4)
        0
        >>> scheduler.advance(0.1)
        1
        >>> calls
        ['run']
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._calls: list[_ManualCall] = []

    def schedule(self, delay_s: float, callback: Callable[[], None]) -> ScheduledCall:
        call = _ManualCall(self.now + delay_s, callback)
        self._calls.append(call)
        return call

    @property
    def pending(self) -> int:
        """Number of calls neither run nor cancelled."""
        return sum(1 for call in self._calls if not call.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run every call that became due.

        Returns:
            Number of callbacks run.
        """
        self.now += seconds
        due = [c for c in self._calls if c.due <= self.now + 1e-9 and not c.cancelled]
        self._calls = [c for c in self._calls if c not in due and not c.cancelled]
        run = 0
        for call in sorted(due, key=lambda c: c.due):
            # An earlier callback may have cancelled this one.
            if not call.cancelled:
                call.callback()
                run += 1
        return run


class InlineExecutor(Executor):
    """Executor that runs each task immediately on the submitting thread.

    Used by the command line, where there is nothing else to do while the
    log is computed.
    """

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:
        future: Future = Future()
        try:
            result = fn(*args, **kwargs)
        except Exception as e:  # pylint: disable=broad-exception-caught
            future.set_exception(e)
        else:
            future.set_result(result)
        return future
