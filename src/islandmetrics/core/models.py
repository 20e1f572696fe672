"""Core domain models for hydration and page-load metrics."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class HydrationEvent:
    """A finalized hydration measurement for one island.

    Attributes:
        component_name: Identifier of the island, unique per page.
        start_time: Milliseconds since navigation start when hydration began.
        end_time: Milliseconds since navigation start when the island
            became interactive.
    """

    component_name: str
    start_time: float
    end_time: float

    def __post_init__(self) -> None:
        if self.end_time < self.start_time:
            raise ValueError(
                f"end_time ({self.end_time}) of {self.component_name!r} "
                f"precedes start_time ({self.start_time})"
            )

    @property
    def duration_ms(self) -> float:
        """Hydration duration in milliseconds."""
        return self.end_time - self.start_time


@dataclass(frozen=True)
class MetricSnapshot:
    """An immutable point-in-time capture of all known page metrics.

    Attributes:
        page_name: The page or view being measured.
        timestamp: Creation time of the snapshot (timing source clock, ms).
        first_contentful_paint: FCP in ms, None until the signal fired.
        largest_contentful_paint: Most recent LCP in ms, None until reported.
        time_to_interactive: TTI in ms, None until the load sequence completed.
        bundle_size_bytes: Build-time bundle size, None when not supplied.
        island_hydrations: Finalized hydrations ordered by start time,
            ties broken by component name.
    """

    page_name: str
    timestamp: float
    first_contentful_paint: float | None = None
    largest_contentful_paint: float | None = None
    time_to_interactive: float | None = None
    bundle_size_bytes: float | None = None
    island_hydrations: tuple[HydrationEvent, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        ordered = tuple(
            sorted(
                self.island_hydrations,
                key=lambda e: (e.start_time, e.component_name),
            )
        )
        object.__setattr__(self, "island_hydrations", ordered)


class MetricStatus(str, Enum):
    """Quality label assigned to a metric value."""

    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs-improvement"
    POOR = "poor"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Threshold:
    """Classification boundaries for a lower-is-better metric.

    Attributes:
        good: Upper bound (inclusive) of the "good" bucket.
        needs_improvement: Upper bound (inclusive) of the
            "needs-improvement" bucket.
    """

    good: float
    needs_improvement: float

    def __post_init__(self) -> None:
        if not self.good < self.needs_improvement:
            raise ValueError(
                f"good ({self.good}) must be lower than "
                f"needs_improvement ({self.needs_improvement})"
            )


@dataclass(frozen=True)
class RefreshPolicy:
    """Configuration for periodic re-collection.

    Attributes:
        interval_ms: Delay between collection passes in milliseconds.
        history_size: Number of snapshots kept for history export.
    """

    interval_ms: float = 5000.0
    history_size: int = 100

    def __post_init__(self) -> None:
        if not self.interval_ms > 0:
            raise ValueError("interval_ms must be positive")
        if self.history_size < 1:
            raise ValueError("history_size must be at least 1")


DEFAULT_REFRESH_POLICY = RefreshPolicy()
