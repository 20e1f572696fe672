"""Refresh scheduler that re-collects metrics to catch late hydrations.

Late islands (e.g. behind a lazy boundary) have no single synchronization
point with the page-level signals, so the scheduler polls the collector at
a fixed interval until stopped.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from islandmetrics.core.collector import MetricCollector
from islandmetrics.core.models import MetricSnapshot
from islandmetrics.core.ports import TimerHandle, TimerPort

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[MetricSnapshot], None]


class SchedulerState(str, Enum):
    """Lifecycle state of a RefreshScheduler."""

    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class RefreshHandle:
    """Identifies one running refresh loop.

    Attributes:
        page_name: Page collected on every tick.
        interval_ms: Delay between collection passes.
        generation: Increases with every start(); stale ticks carry an
            older generation and are discarded.
    """

    page_name: str
    interval_ms: float
    generation: int


class RefreshScheduler:
    """Cooperative polling loop around MetricCollector.collect().

    State machine: IDLE -> RUNNING (start) -> IDLE (stop). Ticks never
    overlap: collection is synchronous and the next tick is only armed
    once the current one has finished.
    """

    def __init__(
        self,
        collector: MetricCollector,
        timer: TimerPort,
        page_name: str,
    ) -> None:
        """Initialize the scheduler.

        Args:
            collector: Collector invoked on every tick.
            timer: Tick source used to arm the next collection.
            page_name: Page name passed to collect().
        """
        self._collector = collector
        self._timer = timer
        self._page_name = page_name
        self._state = SchedulerState.IDLE
        self._handle: RefreshHandle | None = None
        self._pending: TimerHandle | None = None
        self._on_snapshot: SnapshotCallback | None = None
        self._generation = 0
        self._ticks = 0

    @property
    def state(self) -> SchedulerState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is SchedulerState.RUNNING

    @property
    def ticks(self) -> int:
        """Number of collection passes performed since construction."""
        return self._ticks

    def start(self, interval_ms: float, on_snapshot: SnapshotCallback) -> RefreshHandle:
        """Start collecting every interval_ms milliseconds.

        Collects once immediately, then after every interval. Calling
        start() while running returns the existing handle without
        arming a second timer.

        Args:
            interval_ms: Delay between collection passes, must be positive.
            on_snapshot: Called with every new snapshot.

        Returns:
            Handle describing the running loop.

        Raises:
            ValueError: If interval_ms is not positive.
        """
        if self._handle is not None:
            logger.debug("Refresh scheduler already running; start ignored")
            return self._handle
        if not interval_ms > 0:
            raise ValueError("interval_ms must be positive")

        self._generation += 1
        self._handle = RefreshHandle(
            page_name=self._page_name,
            interval_ms=interval_ms,
            generation=self._generation,
        )
        self._on_snapshot = on_snapshot
        self._state = SchedulerState.RUNNING
        logger.debug(
            "Refresh scheduler started for %r every %sms", self._page_name, interval_ms
        )
        handle = self._handle
        self._tick(handle.generation)
        return handle

    def stop(self) -> None:
        """Cancel the pending tick and return to IDLE. Idempotent."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        if self._state is SchedulerState.RUNNING:
            logger.debug("Refresh scheduler stopped for %r", self._page_name)
        self._handle = None
        self._on_snapshot = None
        self._state = SchedulerState.IDLE

    def _tick(self, generation: int) -> None:
        """Collect, deliver, and arm the next tick if still running."""
        if self._handle is None or self._handle.generation != generation:
            return
        self._pending = None
        snapshot = self._collector.collect(self._page_name)
        self._ticks += 1
        callback = self._on_snapshot
        if callback is not None:
            try:
                callback(snapshot)
            except Exception:
                logger.exception("Snapshot callback failed for %r", self._page_name)
        # The callback may have stopped or restarted the scheduler.
        handle = self._handle
        if handle is None or handle.generation != generation:
            return
        self._pending = self._timer.call_later(
            handle.interval_ms, lambda: self._tick(generation)
        )
