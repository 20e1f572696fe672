"""Example FastAPI application with hydration instrumentation endpoints.

Run with:
    uvicorn examples.fastapi_example:app --reload

Endpoints:
    /performance/metrics                 - Latest snapshot (portable JSON)
    /performance/metrics/export          - Latest snapshot as a download
    /performance/metrics/history?since=  - Stored snapshots (NDJSON)
    /performance/status                  - Classified metrics and timeline
    /performance/entries                 - POST PerformanceEntry records
    /performance/hydration/{name}/start  - POST island hydration start
    /performance/hydration/{name}/end    - POST island hydration end

Instrumentation:
    The refresh scheduler re-collects every five seconds so islands that
    hydrate late still appear in /performance/metrics.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from islandmetrics import (
    DEFAULT_REFRESH_POLICY,
    AsyncioTimer,
    HydrationRegistry,
    MetricCollector,
    PerformanceEntryTimingSource,
    RefreshScheduler,
    RingBufferSnapshotStorage,
)
from islandmetrics.adapters.frameworks.fastapi import create_performance_router

logging.basicConfig(level=logging.INFO)

PAGE_NAME = "performance"

# ~85KB, measured by the frontend build
BUNDLE_SIZE_BYTES = 85 * 1024

policy = DEFAULT_REFRESH_POLICY
timing = PerformanceEntryTimingSource()
registry = HydrationRegistry(timing).init()
collector = MetricCollector(registry, timing, bundle_size_bytes=BUNDLE_SIZE_BYTES)
storage = RingBufferSnapshotStorage(max_size=policy.history_size)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Run the refresh scheduler for the lifetime of the app."""
    scheduler = RefreshScheduler(collector, AsyncioTimer(), PAGE_NAME)
    scheduler.start(policy.interval_ms, storage.write)
    try:
        yield
    finally:
        scheduler.stop()
        registry.clear()


app = FastAPI(title="Hydration Metrics Example", lifespan=lifespan)
app.include_router(
    create_performance_router(
        registry=registry,
        collector=collector,
        storage=storage,
        page_name=PAGE_NAME,
        timing=timing,
    )
)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint pointing at the metrics."""
    return {"message": "Hello! Check /performance/metrics and /performance/status."}
