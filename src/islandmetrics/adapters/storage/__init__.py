"""Storage adapters implementing SnapshotStoragePort."""

from islandmetrics.adapters.storage.ring_buffer import RingBufferSnapshotStorage

__all__ = ["RingBufferSnapshotStorage"]
