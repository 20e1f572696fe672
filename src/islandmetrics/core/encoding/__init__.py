"""Encoders for exporting snapshots."""

from islandmetrics.core.encoding.ndjson import encode_snapshots
from islandmetrics.core.encoding.portable import (
    SnapshotDecodeError,
    decode_snapshot,
    encode_snapshot,
    export_filename,
    snapshot_to_dict,
)

__all__ = [
    "SnapshotDecodeError",
    "decode_snapshot",
    "encode_snapshot",
    "encode_snapshots",
    "export_filename",
    "snapshot_to_dict",
]
