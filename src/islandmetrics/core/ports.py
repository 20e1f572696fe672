"""Port interfaces for timing sources, timers and snapshot storage.

These protocols define the contracts that adapters must implement.
The core domain depends only on these interfaces, not concrete implementations.
"""

from collections.abc import Callable, Iterable
from typing import Protocol, runtime_checkable

from islandmetrics.core.models import MetricSnapshot


@runtime_checkable
class TimingSourcePort(Protocol):
    """Port for page-load timing signals and the monotonic clock.

    Getters return None while a signal has not fired yet, and permanently
    when the host does not support it. They never raise.
    Examples: PerformanceEntryTimingSource, scripted fakes in tests.
    """

    def get_first_contentful_paint(self) -> float | None:
        """Return FCP in milliseconds, or None when not available."""
        ...

    def get_largest_contentful_paint(self) -> float | None:
        """Return the most recent LCP in milliseconds, or None."""
        ...

    def get_time_to_interactive(self) -> float | None:
        """Return TTI in milliseconds, or None until load completes."""
        ...

    def now(self) -> float:
        """Return monotonic time in milliseconds since navigation start."""
        ...


@runtime_checkable
class TimerHandle(Protocol):
    """Handle to a pending timer callback."""

    def cancel(self) -> None:
        """Cancel the callback. Safe to call more than once."""
        ...


@runtime_checkable
class TimerPort(Protocol):
    """Port for scheduling delayed callbacks on the event loop.

    Examples: AsyncioTimer, manual tick sources in tests.
    """

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule callback to run once after delay_ms milliseconds."""
        ...


@runtime_checkable
class SnapshotStoragePort(Protocol):
    """Port for keeping collected snapshots.

    Examples: RingBufferSnapshotStorage.
    """

    def write(self, snapshot: MetricSnapshot) -> None:
        """Store a snapshot."""
        ...

    def latest(self) -> MetricSnapshot | None:
        """Return the most recently written snapshot, or None."""
        ...

    def read(self, since: float = 0) -> Iterable[MetricSnapshot]:
        """Read snapshots since the given timestamp.

        Args:
            since: Returns snapshots with timestamp > since.
                   Default 0 returns all snapshots.

        Returns:
            Iterable of MetricSnapshot objects, ordered by timestamp ascending.
        """
        ...
