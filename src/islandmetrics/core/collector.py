"""Metric collector producing one snapshot per collection pass."""

import logging
import math
from collections.abc import Callable

from islandmetrics.core.models import MetricSnapshot
from islandmetrics.core.ports import TimingSourcePort
from islandmetrics.core.registry import HydrationRegistry

logger = logging.getLogger(__name__)


def _validate_bundle_size(value: object) -> float | None:
    """Return value as a float, or None when absent or invalid."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        logger.warning("Ignoring non-numeric bundle size %r", value)
        return None
    if value < 0 or not math.isfinite(value):
        logger.warning("Ignoring invalid bundle size %r", value)
        return None
    return value


class MetricCollector:
    """Assembles MetricSnapshot objects from a registry and a timing source.

    Collection only reads: it never mutates the registry, so calling
    collect() twice without new hydrations yields snapshots that differ
    only in their timestamp.
    """

    def __init__(
        self,
        registry: HydrationRegistry,
        timing: TimingSourcePort,
        bundle_size_bytes: float | None = None,
    ) -> None:
        """Initialize the collector.

        Args:
            registry: Registry holding finalized island hydrations.
            timing: Source of paint/navigation timing and the clock.
            bundle_size_bytes: Build-time bundle size, if measured.
                Negative or non-numeric values are dropped with a warning.
        """
        self._registry = registry
        self._timing = timing
        self._bundle_size_bytes = _validate_bundle_size(bundle_size_bytes)

    @property
    def bundle_size_bytes(self) -> float | None:
        """Bundle size reported in every snapshot."""
        return self._bundle_size_bytes

    @bundle_size_bytes.setter
    def bundle_size_bytes(self, value: float | None) -> None:
        self._bundle_size_bytes = _validate_bundle_size(value)

    def collect(self, page_name: str) -> MetricSnapshot:
        """Collect the current metrics for page_name.

        Args:
            page_name: The page or view being measured.

        Returns:
            A new MetricSnapshot; island hydrations are copied, so later
            registry changes do not affect it.
        """
        return MetricSnapshot(
            page_name=page_name,
            timestamp=self._timing.now(),
            first_contentful_paint=self._read(
                "first contentful paint", self._timing.get_first_contentful_paint
            ),
            largest_contentful_paint=self._read(
                "largest contentful paint", self._timing.get_largest_contentful_paint
            ),
            time_to_interactive=self._read(
                "time to interactive", self._timing.get_time_to_interactive
            ),
            bundle_size_bytes=self._bundle_size_bytes,
            island_hydrations=tuple(self._registry.list()),
        )

    def _read(self, label: str, getter: Callable[[], float | None]) -> float | None:
        """Read one timing signal, treating failures as absence."""
        try:
            return getter()
        except Exception:
            logger.exception("Failed to read %s; reporting as unavailable", label)
            return None
