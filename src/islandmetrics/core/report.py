"""Views over a snapshot for dashboards: classification, slow islands, timeline."""

from dataclasses import dataclass

from islandmetrics.core.models import HydrationEvent, MetricSnapshot, MetricStatus
from islandmetrics.core.thresholds import (
    BUNDLE_SIZE_BYTES,
    DEFAULT_THRESHOLDS,
    FIRST_CONTENTFUL_PAINT,
    ISLAND_HYDRATION,
    ISLAND_HYDRATION_TARGET_MS,
    LARGEST_CONTENTFUL_PAINT,
    TIME_TO_INTERACTIVE,
    ThresholdTable,
    classify,
)


@dataclass(frozen=True)
class MetricReading:
    """A metric value together with its classification."""

    name: str
    value: float | None
    status: MetricStatus


@dataclass(frozen=True)
class TimelineEntry:
    """One island in hydration order.

    Attributes:
        position: 1-based position in the hydration order.
        component_name: Island name.
        started_at: Milliseconds after navigation start.
        duration_ms: Hydration duration.
        status: Classification of the duration.
    """

    position: int
    component_name: str
    started_at: float
    duration_ms: float
    status: MetricStatus


def summarize(
    snapshot: MetricSnapshot,
    table: ThresholdTable = DEFAULT_THRESHOLDS,
) -> list[MetricReading]:
    """Classify every page-level metric of a snapshot."""
    values = (
        (FIRST_CONTENTFUL_PAINT, snapshot.first_contentful_paint),
        (LARGEST_CONTENTFUL_PAINT, snapshot.largest_contentful_paint),
        (TIME_TO_INTERACTIVE, snapshot.time_to_interactive),
        (BUNDLE_SIZE_BYTES, snapshot.bundle_size_bytes),
    )
    return [
        MetricReading(name=name, value=value, status=classify(name, value, table))
        for name, value in values
    ]


def slow_islands(
    snapshot: MetricSnapshot,
    table: ThresholdTable = DEFAULT_THRESHOLDS,
) -> list[HydrationEvent]:
    """Return islands whose hydration took longer than the target.

    The target is the "good" bound of the islandHydration threshold,
    falling back to ISLAND_HYDRATION_TARGET_MS when the table has none.
    """
    threshold = table.get(ISLAND_HYDRATION)
    target = threshold.good if threshold is not None else ISLAND_HYDRATION_TARGET_MS
    return [e for e in snapshot.island_hydrations if e.duration_ms > target]


def hydration_timeline(
    snapshot: MetricSnapshot,
    table: ThresholdTable = DEFAULT_THRESHOLDS,
) -> list[TimelineEntry]:
    """Return islands in the order they started hydrating."""
    return [
        TimelineEntry(
            position=index,
            component_name=event.component_name,
            started_at=event.start_time,
            duration_ms=event.duration_ms,
            status=classify(ISLAND_HYDRATION, event.duration_ms, table),
        )
        for index, event in enumerate(snapshot.island_hydrations, start=1)
    ]
