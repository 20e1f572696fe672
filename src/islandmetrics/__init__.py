"""islandmetrics - hydration and page-load instrumentation for islands pages.

Example:
    ```python
    from islandmetrics import (
        HydrationRegistry,
        MetricCollector,
        PerformanceEntryTimingSource,
        encode_snapshot,
    )

    timing = PerformanceEntryTimingSource()
    registry = HydrationRegistry(timing).init()
    collector = MetricCollector(registry, timing, bundle_size_bytes=87_040)

    registry.mark_start("TaskList")
    registry.mark_end("TaskList")
    print(encode_snapshot(collector.collect("home")))
    ```
"""

from islandmetrics.adapters.storage.ring_buffer import RingBufferSnapshotStorage
from islandmetrics.adapters.timers.asyncio_timer import AsyncioTimer
from islandmetrics.adapters.timing.performance_entries import (
    PerformanceEntryTimingSource,
)
from islandmetrics.core.collector import MetricCollector
from islandmetrics.core.encoding.ndjson import encode_snapshots
from islandmetrics.core.encoding.portable import (
    SnapshotDecodeError,
    decode_snapshot,
    encode_snapshot,
    export_filename,
)
from islandmetrics.core.formatting import format_bytes, format_duration
from islandmetrics.core.models import (
    DEFAULT_REFRESH_POLICY,
    HydrationEvent,
    MetricSnapshot,
    MetricStatus,
    RefreshPolicy,
    Threshold,
)
from islandmetrics.core.ports import (
    SnapshotStoragePort,
    TimerHandle,
    TimerPort,
    TimingSourcePort,
)
from islandmetrics.core.registry import HydrationRegistry
from islandmetrics.core.report import (
    MetricReading,
    TimelineEntry,
    hydration_timeline,
    slow_islands,
    summarize,
)
from islandmetrics.core.scheduler import RefreshHandle, RefreshScheduler, SchedulerState
from islandmetrics.core.thresholds import (
    DEFAULT_THRESHOLDS,
    ThresholdTable,
    classify,
    threshold_table,
)

__all__ = [
    # Models
    "HydrationEvent",
    "MetricSnapshot",
    "MetricStatus",
    "Threshold",
    "RefreshPolicy",
    "DEFAULT_REFRESH_POLICY",
    # Ports
    "TimingSourcePort",
    "TimerPort",
    "TimerHandle",
    "SnapshotStoragePort",
    # Core
    "HydrationRegistry",
    "MetricCollector",
    "RefreshScheduler",
    "RefreshHandle",
    "SchedulerState",
    "DEFAULT_THRESHOLDS",
    "ThresholdTable",
    "classify",
    "threshold_table",
    "MetricReading",
    "TimelineEntry",
    "summarize",
    "slow_islands",
    "hydration_timeline",
    "format_duration",
    "format_bytes",
    # Encoding
    "encode_snapshot",
    "decode_snapshot",
    "encode_snapshots",
    "export_filename",
    "SnapshotDecodeError",
    # Adapters
    "PerformanceEntryTimingSource",
    "AsyncioTimer",
    "RingBufferSnapshotStorage",
]
