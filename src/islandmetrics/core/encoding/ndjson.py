"""NDJSON encoder for snapshot history."""

import json
from collections.abc import Iterable

from islandmetrics.core.encoding.portable import snapshot_to_dict
from islandmetrics.core.models import MetricSnapshot


def encode_snapshots(snapshots: Iterable[MetricSnapshot]) -> str:
    """Encode snapshots to newline-delimited JSON.

    Args:
        snapshots: An iterable of MetricSnapshot objects.

    Returns:
        NDJSON string with one portable snapshot object per line.
        Empty string if no snapshots.
    """
    lines = [
        json.dumps(snapshot_to_dict(snapshot), allow_nan=False)
        for snapshot in snapshots
    ]

    if not lines:
        return ""

    return "\n".join(lines) + "\n"
