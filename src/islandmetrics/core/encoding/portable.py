"""Portable JSON export format for metric snapshots.

The payload has a fixed key order and uses null for values that are not
available yet, so that absence is never confused with zero:

    {
      "pageName": "home",
      "timestamp": 1234.5,
      "firstContentfulPaint": 812.0,
      "largestContentfulPaint": null,
      "timeToInteractive": null,
      "bundleSizeBytes": 87040,
      "islandHydrations": [
        {"componentName": "TaskList", "startTime": 45.0, "endTime": 90.0,
         "durationMs": 45.0}
      ]
    }

Decoding and re-encoding a payload produced here yields identical bytes.
"""

import json
import math
from typing import Any

from islandmetrics.core.models import HydrationEvent, MetricSnapshot


class SnapshotDecodeError(ValueError):
    """Raised when a payload is not a valid portable snapshot."""


def _hydration_to_dict(event: HydrationEvent) -> dict[str, Any]:
    return {
        "componentName": event.component_name,
        "startTime": event.start_time,
        "endTime": event.end_time,
        "durationMs": event.duration_ms,
    }


def snapshot_to_dict(snapshot: MetricSnapshot) -> dict[str, Any]:
    """Convert a snapshot to the ordered portable dictionary."""
    return {
        "pageName": snapshot.page_name,
        "timestamp": snapshot.timestamp,
        "firstContentfulPaint": snapshot.first_contentful_paint,
        "largestContentfulPaint": snapshot.largest_contentful_paint,
        "timeToInteractive": snapshot.time_to_interactive,
        "bundleSizeBytes": snapshot.bundle_size_bytes,
        "islandHydrations": [
            _hydration_to_dict(e) for e in snapshot.island_hydrations
        ],
    }


def encode_snapshot(snapshot: MetricSnapshot) -> str:
    """Encode a snapshot to the portable JSON format.

    Args:
        snapshot: The snapshot to export.

    Returns:
        JSON text with two-space indentation and a trailing newline.

    Raises:
        ValueError: If the snapshot holds NaN or infinite values.
    """
    return json.dumps(snapshot_to_dict(snapshot), indent=2, allow_nan=False) + "\n"


def export_filename(snapshot: MetricSnapshot) -> str:
    """Return the download filename for an exported snapshot."""
    return f"performance-metrics-{snapshot.page_name}-{int(snapshot.timestamp)}.json"


def _optional_number(obj: dict[str, Any], key: str) -> float | None:
    """Read a nullable numeric field; the key itself must be present."""
    if key not in obj:
        raise SnapshotDecodeError(f"Missing field {key!r}")
    if obj[key] is None:
        return None
    return _number(obj, key)


def _number(obj: dict[str, Any], key: str) -> float:
    """Read a numeric field, rejecting booleans and non-finite values."""
    if key not in obj:
        raise SnapshotDecodeError(f"Missing field {key!r}")
    value = obj[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SnapshotDecodeError(f"Field {key!r} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise SnapshotDecodeError(f"Field {key!r} must be finite")
    return value


def _string(obj: dict[str, Any], key: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise SnapshotDecodeError(f"Field {key!r} must be a string, got {value!r}")
    return value


def _decode_hydration(obj: Any) -> HydrationEvent:
    if not isinstance(obj, dict):
        raise SnapshotDecodeError(f"Hydration entry must be an object, got {obj!r}")
    start = _number(obj, "startTime")
    end = _number(obj, "endTime")
    if end < start:
        raise SnapshotDecodeError("Hydration endTime precedes startTime")
    event = HydrationEvent(
        component_name=_string(obj, "componentName"),
        start_time=start,
        end_time=end,
    )
    if "durationMs" in obj and _number(obj, "durationMs") != event.duration_ms:
        raise SnapshotDecodeError(
            f"durationMs of {event.component_name!r} does not match endTime - startTime"
        )
    return event


def decode_snapshot(payload: str | bytes) -> MetricSnapshot:
    """Decode a portable JSON payload back into a snapshot.

    Args:
        payload: JSON text as produced by encode_snapshot().

    Returns:
        The decoded MetricSnapshot, hydrations sorted by start time.

    Raises:
        SnapshotDecodeError: If the payload is not valid JSON or does not
            have the portable shape.
    """
    try:
        obj = json.loads(payload)
    except json.JSONDecodeError as e:
        raise SnapshotDecodeError(f"Invalid JSON: {e}") from e
    if not isinstance(obj, dict):
        raise SnapshotDecodeError("Snapshot payload must be a JSON object")

    hydrations = obj.get("islandHydrations")
    if not isinstance(hydrations, list):
        raise SnapshotDecodeError("Field 'islandHydrations' must be a list")

    return MetricSnapshot(
        page_name=_string(obj, "pageName"),
        timestamp=_number(obj, "timestamp"),
        first_contentful_paint=_optional_number(obj, "firstContentfulPaint"),
        largest_contentful_paint=_optional_number(obj, "largestContentfulPaint"),
        time_to_interactive=_optional_number(obj, "timeToInteractive"),
        bundle_size_bytes=_optional_number(obj, "bundleSizeBytes"),
        island_hydrations=tuple(_decode_hydration(h) for h in hydrations),
    )
