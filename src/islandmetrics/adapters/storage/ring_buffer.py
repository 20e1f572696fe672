"""Ring buffer storage for collected snapshots.

Provides bounded in-memory storage that automatically evicts the oldest
snapshot when the buffer is full. Snapshots are never persisted.
"""

from collections import deque
from collections.abc import Iterable

from islandmetrics.core.models import MetricSnapshot


class RingBufferSnapshotStorage:
    """Ring buffer implementation of SnapshotStoragePort.

    Each snapshot supersedes the previous one as "latest"; older ones are
    kept only for history export until evicted.

    Args:
        max_size: Maximum number of snapshots to store.
    """

    def __init__(self, max_size: int = 100) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._buffer: deque[MetricSnapshot] = deque(maxlen=max_size)

    def write(self, snapshot: MetricSnapshot) -> None:
        """Write a snapshot to storage."""
        self._buffer.append(snapshot)

    def latest(self) -> MetricSnapshot | None:
        """Return the most recently written snapshot."""
        return self._buffer[-1] if self._buffer else None

    def read(self, since: float = 0) -> Iterable[MetricSnapshot]:
        """Read snapshots since the given timestamp.

        Returns snapshots with timestamp > since, ordered by timestamp ascending.
        """
        filtered = [s for s in self._buffer if s.timestamp > since]
        return sorted(filtered, key=lambda s: s.timestamp)

    def clear(self) -> None:
        """Drop every stored snapshot."""
        self._buffer.clear()

    def __len__(self) -> int:
        return len(self._buffer)
