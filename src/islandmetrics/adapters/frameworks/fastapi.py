"""FastAPI adapter for performance instrumentation endpoints."""

import json
import logging
from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Body, Query, Response
from fastapi.responses import JSONResponse

from islandmetrics.adapters.frameworks.query_params import _parse_since_param
from islandmetrics.adapters.timing.performance_entries import (
    PerformanceEntryTimingSource,
)
from islandmetrics.core.collector import MetricCollector
from islandmetrics.core.encoding.ndjson import encode_snapshots
from islandmetrics.core.encoding.portable import encode_snapshot, export_filename
from islandmetrics.core.formatting import format_bytes, format_duration
from islandmetrics.core.models import MetricSnapshot
from islandmetrics.core.ports import SnapshotStoragePort
from islandmetrics.core.registry import HydrationRegistry
from islandmetrics.core.report import hydration_timeline, slow_islands, summarize
from islandmetrics.core.thresholds import (
    BUNDLE_SIZE_BYTES,
    DEFAULT_THRESHOLDS,
    ThresholdTable,
)

logger = logging.getLogger(__name__)

_ERROR_BODY = json.dumps({"error": "Internal Server Error"})


def _handle_endpoint(
    build_body: Callable[[], str],
    media_type: str,
    log_message: str,
    headers: dict[str, str] | None = None,
) -> Response:
    """Build a response body with error handling.

    Args:
        build_body: Function that returns the response body.
        media_type: Content-Type for the success response.
        log_message: Message to log on error.
        headers: Extra headers for the success response.
    """
    try:
        body = build_body()
    except Exception:
        logger.exception(log_message)
        return Response(
            content=_ERROR_BODY, status_code=500, media_type="application/json"
        )
    return Response(content=body, media_type=media_type, headers=headers)


def _display(name: str, value: float | None) -> str | None:
    if value is None:
        return None
    if name == BUNDLE_SIZE_BYTES:
        return format_bytes(value)
    return format_duration(value)


def _status_body(
    snapshot: MetricSnapshot,
    registry: HydrationRegistry,
    thresholds: ThresholdTable,
) -> str:
    """Render the classification view of a snapshot as JSON."""
    body: dict[str, Any] = {
        "pageName": snapshot.page_name,
        "timestamp": snapshot.timestamp,
        "metrics": [
            {
                "name": reading.name,
                "value": reading.value,
                "display": _display(reading.name, reading.value),
                "status": reading.status.value,
            }
            for reading in summarize(snapshot, thresholds)
        ],
        "slowIslands": [e.component_name for e in slow_islands(snapshot, thresholds)],
        "timeline": [
            {
                "position": entry.position,
                "componentName": entry.component_name,
                "startedAt": entry.started_at,
                "durationMs": entry.duration_ms,
                "display": format_duration(entry.duration_ms),
                "status": entry.status.value,
            }
            for entry in hydration_timeline(snapshot, thresholds)
        ],
        "pending": registry.pending(),
    }
    return json.dumps(body, allow_nan=False)


def create_performance_router(
    registry: HydrationRegistry,
    collector: MetricCollector,
    storage: SnapshotStoragePort,
    page_name: str,
    timing: PerformanceEntryTimingSource | None = None,
    thresholds: ThresholdTable = DEFAULT_THRESHOLDS,
    prefix: str = "/performance",
) -> APIRouter:
    """Create a FastAPI router exposing hydration metrics.

    Args:
        registry: Registry the hydration endpoints write to.
        collector: Collector used when no snapshot has been stored yet.
        storage: Storage holding snapshots written by the refresh scheduler.
        page_name: Page name used for on-demand collection.
        timing: Timing source fed by POST /entries. The endpoint is only
            mounted when a timing source is given.
        thresholds: Threshold table used by /status.
        prefix: Path prefix for every endpoint.

    Returns:
        APIRouter with /metrics, /metrics/export, /metrics/history, /status
        and the instrumentation endpoints configured.
    """
    router = APIRouter(prefix=prefix)

    def latest_snapshot() -> MetricSnapshot:
        snapshot = storage.latest()
        if snapshot is None:
            snapshot = collector.collect(page_name)
            storage.write(snapshot)
        return snapshot

    @router.get("/metrics")
    async def get_metrics() -> Response:
        """Return the latest snapshot in the portable JSON format."""
        return _handle_endpoint(
            lambda: encode_snapshot(latest_snapshot()),
            "application/json",
            "Error encoding metrics endpoint",
        )

    @router.get("/metrics/export")
    async def export_metrics() -> Response:
        """Return the latest snapshot as a downloadable JSON file."""
        try:
            snapshot = latest_snapshot()
            body = encode_snapshot(snapshot)
        except Exception:
            logger.exception("Error encoding metrics export")
            return Response(
                content=_ERROR_BODY, status_code=500, media_type="application/json"
            )
        filename = export_filename(snapshot)
        return Response(
            content=body,
            media_type="application/json",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    @router.get("/metrics/history")
    async def get_history(since: str | None = Query(default=None)) -> Response:
        """Return stored snapshots in NDJSON format.

        Args:
            since: Timestamp. Returns snapshots with timestamp > since.
        """
        since_value = _parse_since_param(since)
        return _handle_endpoint(
            lambda: encode_snapshots(storage.read(since=since_value)),
            "application/x-ndjson",
            "Error encoding metrics history",
        )

    @router.get("/status")
    async def get_status() -> Response:
        """Return every metric with its classification."""
        return _handle_endpoint(
            lambda: _status_body(latest_snapshot(), registry, thresholds),
            "application/json",
            "Error building status endpoint",
        )

    @router.post("/hydration/{name}/start", status_code=204)
    async def hydration_start(name: str) -> Response:
        """Mark the start of an island's hydration."""
        registry.mark_start(name)
        return Response(status_code=204)

    @router.post("/hydration/{name}/end", status_code=204)
    async def hydration_end(name: str) -> Response:
        """Mark an island as interactive."""
        registry.mark_end(name)
        return Response(status_code=204)

    if timing is not None:

        @router.post("/entries", status_code=202)
        async def post_entries(
            entries: list[dict[str, Any]] = Body(...),
        ) -> JSONResponse:
            """Accept PerformanceEntry records observed by the page."""
            accepted = timing.observe_all(entries)
            return JSONResponse(
                status_code=202,
                content={"received": len(entries), "accepted": accepted},
            )

    return router
