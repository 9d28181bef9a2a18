"""Navigation log orchestration.

The orchestrator owns the current flight plan and keeps its navigation log up
to date:

    IDLE --update_plan--> (debounce) --> COMPUTING --> READY
                                                   |
                                                   +--> ERROR

Edits to fields the log depends on schedule a recompute after a debounce
delay; a newer edit supersedes the pending one. Each computation gets a
monotonically increasing request id and only the result of the latest request
is applied, so a slow answer never overwrites a newer one. On failure the
previous log is kept and marked stale.

Every state change is published as a :class:`NavLogUpdatedEvent`.

Typical usage:
    orchestrator = NavLogOrchestrator(calculator, ThreadingScheduler(), event_bus=bus)
    orchestrator.update_plan(plan)
    ...
    snapshot = orchestrator.snapshot()
"""

import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from functools import partial

from navplan.core.event_bus import Event, EventBus
from navplan.core.logging_system import get_logger
from navplan.navigation.flight_plan import FlightPlan
from navplan.planning.aggregator import MISSING_ENDPOINTS_MESSAGE
from navplan.planning.calculator import NavLogCalculator
from navplan.planning.errors import NavLogError
from navplan.planning.navlog import NavigationLog
from navplan.planning.persistence import FlightPlanStore
from navplan.planning.scheduler import ScheduledCall, Scheduler

logger = get_logger(__name__)

DEFAULT_DEBOUNCE_S = 0.5


class NavLogState(Enum):
    """Lifecycle of the navigation log."""

    IDLE = "idle"
    COMPUTING = "computing"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class NavLogSnapshot:
    """Consistent view of the orchestrator state.

    Attributes:
        state: Current lifecycle state
        log: Latest successful log (kept on error)
        is_loading: True while a computation is in flight
        error: Message of the last failure, None otherwise
        last_updated: When the log was last replaced
        is_stale: True when the log no longer matches the current plan
        warnings: Warnings of the current log
    """

    state: NavLogState = NavLogState.IDLE
    log: NavigationLog | None = None
    is_loading: bool = False
    error: str | None = None
    last_updated: datetime | None = None
    is_stale: bool = False
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def total_distance_nm(self) -> float:
        return self.log.total_distance_nm if self.log else 0.0

    @property
    def total_duration_min(self) -> float:
        return self.log.total_duration_min if self.log else 0.0

    @property
    def total_fuel(self) -> float:
        return self.log.fuel.total if self.log and self.log.fuel else 0.0


@dataclass(frozen=True)
class NavLogUpdatedEvent(Event):
    """Published on every orchestrator state change."""

    snapshot: NavLogSnapshot = field(default_factory=NavLogSnapshot)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NavLogOrchestrator:
    """Recompute the navigation log when the flight plan changes."""

    def __init__(
        self,
        calculator: NavLogCalculator,
        scheduler: Scheduler,
        executor: Executor | None = None,
        store: FlightPlanStore | None = None,
        event_bus: EventBus | None = None,
        debounce_s: float = DEFAULT_DEBOUNCE_S,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            calculator: Strategy computing the log
            scheduler: Runs the debounced recompute
            executor: Runs computations; a private thread pool if None
            store: Persists every plan passed to update_plan (optional)
            event_bus: Receives NavLogUpdatedEvent (optional)
            debounce_s: Quiet period before an edit triggers a recompute
            clock: Source of last_updated timestamps
        """
        self.calculator = calculator
        self.scheduler = scheduler
        self.store = store
        self.event_bus = event_bus
        self.debounce_s = debounce_s
        self.clock = clock

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="navlog")
        self._lock = threading.RLock()

        self._plan: FlightPlan | None = None
        self._plan_key: tuple | None = None
        self._pending: ScheduledCall | None = None
        self._schedule_seq = 0
        self._request_id = 0

        self._state = NavLogState.IDLE
        self._log: NavigationLog | None = None
        self._error: str | None = None
        self._last_updated: datetime | None = None
        self._stale = False

    @property
    def plan(self) -> FlightPlan | None:
        return self._plan

    def load(self) -> FlightPlan:
        """Load the stored plan and schedule its computation.

        Raises:
            RuntimeError: If no store is configured.
        """
        if self.store is None:
            raise RuntimeError("No flight plan store configured")
        plan = self.store.load()
        self.update_plan(plan, persist=False)
        return plan

    def update_plan(self, plan: FlightPlan, persist: bool = True) -> bool:
        """Make plan the current plan.

        Args:
            plan: New flight plan
            persist: Save the plan to the store (if any)

        Returns:
            True if a recompute was scheduled.
        """
        key = plan.computation_key()
        with self._lock:
            changed = key != self._plan_key
            self._plan = plan
            self._plan_key = key
            if changed:
                self._stale = self._log is not None
                if self._pending is not None:
                    self._pending.cancel()
                self._schedule_seq += 1
                self._pending = self.scheduler.schedule(
                    self.debounce_s, partial(self._run_scheduled, self._schedule_seq)
                )

        if persist and self.store is not None:
            self.store.save(plan)
        if changed:
            logger.debug("Plan changed, recompute in %.2fs", self.debounce_s)
        return changed

    def refresh(self) -> None:
        """Recompute now, superseding any pending or in-flight computation."""
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
            self._schedule_seq += 1
        self._start_request()

    def snapshot(self) -> NavLogSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def close(self) -> None:
        """Cancel the pending recompute and release the private executor."""
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
            self._schedule_seq += 1
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    def _run_scheduled(self, seq: int) -> None:
        with self._lock:
            # A timer may fire after a newer edit replaced it.
            if seq != self._schedule_seq:
                logger.debug("Ignoring superseded recompute %d", seq)
                return
            self._pending = None
        self._start_request()

    def _start_request(self) -> None:
        with self._lock:
            plan = self._plan
            if plan is None:
                return
            self._request_id += 1
            request_id = self._request_id
            request_key = self._plan_key

            if not plan.has_endpoints:
                self._state = NavLogState.ERROR
                self._error = MISSING_ENDPOINTS_MESSAGE
                snapshot = self._snapshot_locked()
            else:
                self._state = NavLogState.COMPUTING
                self._error = None
                snapshot = self._snapshot_locked()

        self._publish(snapshot)
        if snapshot.state is NavLogState.ERROR:
            logger.info(MISSING_ENDPOINTS_MESSAGE)
            return

        logger.debug("Computing navigation log, request %d", request_id)
        future = self._executor.submit(self.calculator.compute, plan)
        future.add_done_callback(partial(self._on_complete, request_id, request_key))

    def _on_complete(self, request_id: int, request_key: tuple | None, future: Future) -> None:
        with self._lock:
            if request_id != self._request_id:
                logger.debug("Discarding result of superseded request %d", request_id)
                return

            try:
                log = future.result()
            except NavLogError as e:
                logger.warning("Navigation log failed: %s", e)
                self._fail(str(e))
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.exception("Unexpected error computing navigation log")
                self._fail(str(e) or type(e).__name__)
            else:
                self._log = log
                self._state = NavLogState.READY
                self._error = None
                # The plan may have changed while this request was running.
                self._stale = request_key != self._plan_key
                self._last_updated = self.clock()
            snapshot = self._snapshot_locked()

        self._publish(snapshot)

    def _fail(self, message: str) -> None:
        self._state = NavLogState.ERROR
        self._error = message
        self._stale = self._log is not None

    def _snapshot_locked(self) -> NavLogSnapshot:
        return NavLogSnapshot(
            state=self._state,
            log=self._log,
            is_loading=self._state is NavLogState.COMPUTING,
            error=self._error,
            last_updated=self._last_updated,
            is_stale=self._stale,
            warnings=self._log.warnings if self._log else (),
        )

    def _publish(self, snapshot: NavLogSnapshot) -> None:
        if self.event_bus is not None:
            self.event_bus.publish(NavLogUpdatedEvent(snapshot=snapshot))
