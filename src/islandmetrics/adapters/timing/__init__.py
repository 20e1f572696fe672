"""Timing sources implementing TimingSourcePort."""

from islandmetrics.adapters.timing.performance_entries import (
    DEFAULT_SUPPORTED_ENTRY_TYPES,
    PerformanceEntryTimingSource,
)

__all__ = ["DEFAULT_SUPPORTED_ENTRY_TYPES", "PerformanceEntryTimingSource"]
