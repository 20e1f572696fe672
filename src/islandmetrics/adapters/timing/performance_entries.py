"""Timing source fed with browser PerformanceEntry records.

The page posts the entries its PerformanceObserver sees (paint,
largest-contentful-paint, navigation) and this adapter turns them into the
uniform TimingSourcePort shape. Signals arrive at unpredictable times; every
getter may be read before or after its signal fired.
"""

import logging
import math
import time
from collections.abc import Callable, Iterable, Mapping
from typing import Any

logger = logging.getLogger(__name__)

PAINT = "paint"
LARGEST_CONTENTFUL_PAINT = "largest-contentful-paint"
NAVIGATION = "navigation"
FIRST_CONTENTFUL_PAINT_NAME = "first-contentful-paint"

DEFAULT_SUPPORTED_ENTRY_TYPES = frozenset({PAINT, LARGEST_CONTENTFUL_PAINT, NAVIGATION})


def _timestamp(entry: Mapping[str, Any], key: str) -> float | None:
    """Return a non-negative finite number from entry[key], or None."""
    value = entry.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value < 0 or not math.isfinite(value):
        return None
    return float(value)


class PerformanceEntryTimingSource:
    """Production implementation of TimingSourcePort.

    - first-contentful-paint becomes available at most once; later reports
      are ignored.
    - largest-contentful-paint may be reported several times as larger
      content renders; the most recent report wins.
    - time to interactive is the navigation entry's domInteractive, exposed
      only once loadEventEnd shows the load sequence completed.

    Entry types missing from supported_entry_types model a host without that
    capability: their getter permanently returns None.

    Example:
        ```python
        timing = PerformanceEntryTimingSource()
        timing.observe({"entryType": "paint", "name": "first-contentful-paint",
                        "startTime": 812.4})
        timing.get_first_contentful_paint()  # 812.4
        ```
    """

    def __init__(
        self,
        supported_entry_types: Iterable[str] = DEFAULT_SUPPORTED_ENTRY_TYPES,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        """Initialize the timing source.

        Args:
            supported_entry_types: Entry types the host can deliver.
            clock: Monotonic clock in seconds; now() is measured from the
                moment of construction (navigation start).
        """
        self._supported = frozenset(supported_entry_types)
        self._clock = clock
        self._origin = clock()
        self._fcp: float | None = None
        self._lcp: float | None = None
        self._tti: float | None = None

    @property
    def supported_entry_types(self) -> frozenset[str]:
        return self._supported

    def supports(self, entry_type: str) -> bool:
        """Return True if the host delivers entries of entry_type."""
        return entry_type in self._supported

    def now(self) -> float:
        """Milliseconds elapsed since this source was created."""
        return (self._clock() - self._origin) * 1000

    def get_first_contentful_paint(self) -> float | None:
        return self._fcp if self.supports(PAINT) else None

    def get_largest_contentful_paint(self) -> float | None:
        return self._lcp if self.supports(LARGEST_CONTENTFUL_PAINT) else None

    def get_time_to_interactive(self) -> float | None:
        return self._tti if self.supports(NAVIGATION) else None

    def observe(self, entry: Mapping[str, Any]) -> bool:
        """Record one performance entry.

        Args:
            entry: PerformanceEntry-shaped mapping with at least entryType
                and startTime (navigation entries carry domInteractive and
                loadEventEnd instead).

        Returns:
            True if the entry changed a signal, False if it was ignored.
        """
        if not isinstance(entry, Mapping):
            logger.warning("Ignoring performance entry that is not an object: %r", entry)
            return False
        entry_type = entry.get("entryType")
        if not isinstance(entry_type, str) or not self.supports(entry_type):
            logger.debug("Ignoring unsupported performance entry type %r", entry_type)
            return False
        if entry_type == PAINT:
            return self._observe_paint(entry)
        if entry_type == LARGEST_CONTENTFUL_PAINT:
            return self._observe_lcp(entry)
        if entry_type == NAVIGATION:
            return self._observe_navigation(entry)
        return False

    def observe_all(self, entries: Iterable[Mapping[str, Any]]) -> int:
        """Record a batch of entries and return how many changed a signal."""
        return sum(1 for entry in entries if self.observe(entry))

    def _observe_paint(self, entry: Mapping[str, Any]) -> bool:
        if entry.get("name") != FIRST_CONTENTFUL_PAINT_NAME:
            return False
        start = _timestamp(entry, "startTime")
        if start is None:
            logger.warning("Ignoring malformed first-contentful-paint entry: %r", entry)
            return False
        if self._fcp is not None:
            logger.debug("first-contentful-paint already recorded; ignoring %s", start)
            return False
        self._fcp = start
        return True

    def _observe_lcp(self, entry: Mapping[str, Any]) -> bool:
        start = _timestamp(entry, "startTime")
        if start is None:
            logger.warning("Ignoring malformed largest-contentful-paint entry: %r", entry)
            return False
        self._lcp = start
        return True

    def _observe_navigation(self, entry: Mapping[str, Any]) -> bool:
        dom_interactive = _timestamp(entry, "domInteractive")
        load_event_end = _timestamp(entry, "loadEventEnd")
        if dom_interactive is None or load_event_end is None:
            logger.warning("Ignoring malformed navigation entry: %r", entry)
            return False
        if load_event_end <= 0:
            # Load sequence still running
            return False
        self._tti = dom_interactive
        return True
