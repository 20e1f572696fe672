"""Threshold table and classifier for page-quality metrics.

All current metrics are lower-is-better. Values exactly at a boundary
belong to the better bucket.
"""

from collections.abc import Mapping
from types import MappingProxyType

from islandmetrics.core.models import MetricStatus, Threshold

ThresholdTable = Mapping[str, Threshold]

FIRST_CONTENTFUL_PAINT = "firstContentfulPaint"
LARGEST_CONTENTFUL_PAINT = "largestContentfulPaint"
TIME_TO_INTERACTIVE = "timeToInteractive"
BUNDLE_SIZE_BYTES = "bundleSizeBytes"
ISLAND_HYDRATION = "islandHydration"

BUNDLE_SIZE_TARGET_BYTES = 100 * 1024
ISLAND_HYDRATION_TARGET_MS = 200.0

# Milliseconds, except bundle size in bytes.
DEFAULT_THRESHOLDS: ThresholdTable = MappingProxyType(
    {
        FIRST_CONTENTFUL_PAINT: Threshold(good=1500.0, needs_improvement=2500.0),
        LARGEST_CONTENTFUL_PAINT: Threshold(good=2500.0, needs_improvement=4000.0),
        TIME_TO_INTERACTIVE: Threshold(good=3800.0, needs_improvement=7300.0),
        BUNDLE_SIZE_BYTES: Threshold(
            good=BUNDLE_SIZE_TARGET_BYTES,
            needs_improvement=BUNDLE_SIZE_TARGET_BYTES * 1.5,
        ),
        ISLAND_HYDRATION: Threshold(
            good=ISLAND_HYDRATION_TARGET_MS, needs_improvement=500.0
        ),
    }
)


def threshold_table(entries: Mapping[str, Mapping[str, float]]) -> ThresholdTable:
    """Build a read-only threshold table from plain data.

    Args:
        entries: Metric name -> {"good": ..., "needsImprovement": ...}.

    Returns:
        Immutable mapping of metric name to Threshold.

    Raises:
        ValueError: If an entry is missing a bound or good >= needsImprovement.
    """
    table: dict[str, Threshold] = {}
    for name, bounds in entries.items():
        try:
            good = float(bounds["good"])
            needs_improvement = float(bounds["needsImprovement"])
        except (KeyError, TypeError) as e:
            raise ValueError(f"Invalid threshold entry for {name!r}: {e}") from e
        table[name] = Threshold(good=good, needs_improvement=needs_improvement)
    return MappingProxyType(table)


def classify(
    metric_name: str,
    value: float | None,
    table: ThresholdTable = DEFAULT_THRESHOLDS,
) -> MetricStatus:
    """Classify a metric value against the threshold table.

    Args:
        metric_name: Name of the metric (e.g., "largestContentfulPaint").
        value: Measured value, or None when not available. Non-numeric
            values are treated as unavailable.
        table: Threshold table to look the metric up in.

    Returns:
        MetricStatus.UNKNOWN when the metric has no entry or no usable value,
        otherwise GOOD, NEEDS_IMPROVEMENT or POOR.
    """
    threshold = table.get(metric_name)
    if threshold is None or isinstance(value, bool):
        return MetricStatus.UNKNOWN
    # NaN compares false against both bounds
    if not isinstance(value, (int, float)) or value != value:
        return MetricStatus.UNKNOWN
    if value <= threshold.good:
        return MetricStatus.GOOD
    if value <= threshold.needs_improvement:
        return MetricStatus.NEEDS_IMPROVEMENT
    return MetricStatus.POOR
