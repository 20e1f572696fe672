"""Hydration registry keyed by island name."""

import logging

from islandmetrics.core.models import HydrationEvent
from islandmetrics.core.ports import TimingSourcePort

logger = logging.getLogger(__name__)


def _sort_key(event: HydrationEvent) -> tuple[float, str]:
    return (event.start_time, event.component_name)


class HydrationRegistry:
    """Stores the most recent hydration timing for each island of a page view.

    Islands call mark_start() before their setup work and mark_end() once
    interactive. Misuse never raises: it degrades to a no-op (or overwrite)
    plus a warning, so instrumentation cannot break the page it measures.

    The registry is owned by whoever constructs it. Call init() when a page
    view begins and clear() on navigation teardown.

    Example:
        ```python
        registry = HydrationRegistry(timing)
        registry.mark_start("TaskList")
        ...
        registry.mark_end("TaskList")
        registry.list()
        ```
    """

    def __init__(self, timing: TimingSourcePort) -> None:
        """Initialize the registry with the clock used for timestamps.

        Args:
            timing: Timing source whose now() provides start and end times.
        """
        self._timing = timing
        self._pending: dict[str, float] = {}
        self._events: dict[str, HydrationEvent] = {}

    def init(self) -> "HydrationRegistry":
        """Prepare the registry for a new page view.

        Drops finalized events and provisional starts left by a previous view.
        """
        self._pending.clear()
        self._events.clear()
        logger.debug("Hydration registry initialized")
        return self

    def mark_start(self, name: str) -> None:
        """Record the current time as the provisional start for name.

        A second call before mark_end() replaces the earlier start.
        """
        if not _valid_name(name):
            logger.warning("Ignoring hydration start with invalid name %r", name)
            return
        now = self._timing.now()
        if name in self._pending:
            logger.warning(
                "Hydration start for %r called twice before end; "
                "replacing start %.3f with %.3f",
                name,
                self._pending[name],
                now,
            )
        self._pending[name] = now

    def mark_end(self, name: str) -> None:
        """Finalize the hydration of name, replacing any earlier event."""
        if not _valid_name(name):
            logger.warning("Ignoring hydration end with invalid name %r", name)
            return
        start = self._pending.get(name)
        if start is None:
            logger.warning("Hydration end for %r has no matching start; ignored", name)
            return
        end = self._timing.now()
        if end < start:
            logger.warning(
                "Hydration end for %r (%.3f) precedes its start (%.3f); ignored",
                name,
                end,
                start,
            )
            return
        del self._pending[name]
        if name in self._events:
            logger.debug("Replacing previous hydration event for %r", name)
        self._events[name] = HydrationEvent(
            component_name=name, start_time=start, end_time=end
        )

    def list(self) -> list[HydrationEvent]:
        """Return finalized events ordered by start time, then name."""
        return sorted(self._events.values(), key=_sort_key)

    def pending(self) -> "list[str]":
        """Return names that started hydrating but have not finished."""
        return sorted(self._pending)

    def clear(self) -> None:
        """Empty the registry on navigation teardown."""
        self._pending.clear()
        self._events.clear()
        logger.debug("Hydration registry cleared")

    def __len__(self) -> int:
        return len(self._events)

    def __contains__(self, name: object) -> bool:
        return name in self._events


def _valid_name(name: object) -> bool:
    return isinstance(name, str) and bool(name.strip())
