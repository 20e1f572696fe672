"""Shared test fixtures for all test modules."""

import pytest

from islandmetrics.adapters.storage.ring_buffer import RingBufferSnapshotStorage
from islandmetrics.core.collector import MetricCollector
from islandmetrics.core.models import HydrationEvent, MetricSnapshot
from islandmetrics.core.registry import HydrationRegistry
from tests.fakes import ManualTimer, ScriptedTimingSource

try:
    import httpx
except ImportError:
    httpx = None


@pytest.fixture
def timing() -> ScriptedTimingSource:
    """Deterministic timing source starting at t=0."""
    return ScriptedTimingSource()


@pytest.fixture
def registry(timing: ScriptedTimingSource) -> HydrationRegistry:
    """Fresh registry bound to the scripted clock."""
    return HydrationRegistry(timing).init()


@pytest.fixture
def collector(
    registry: HydrationRegistry, timing: ScriptedTimingSource
) -> MetricCollector:
    """Collector over the scripted registry and timing source."""
    return MetricCollector(registry, timing)


@pytest.fixture
def manual_timer() -> ManualTimer:
    """Tick source advanced explicitly by tests."""
    return ManualTimer()


@pytest.fixture
def snapshot_storage() -> RingBufferSnapshotStorage:
    """Empty snapshot storage."""
    return RingBufferSnapshotStorage(max_size=10)


@pytest.fixture
def hydrate(registry: HydrationRegistry, timing: ScriptedTimingSource):
    """Factory fixture that records one hydration with explicit times.

    Usage:
        def test_something(hydrate):
            hydrate("TaskList", start=45, end=90)
    """

    def _hydrate(name: str, start: float, end: float) -> None:
        timing.set_time(start)
        registry.mark_start(name)
        timing.set_time(end)
        registry.mark_end(name)

    return _hydrate


@pytest.fixture
def sample_snapshot() -> MetricSnapshot:
    """Snapshot with every field populated."""
    return MetricSnapshot(
        page_name="home",
        timestamp=1500.25,
        first_contentful_paint=812.5,
        largest_contentful_paint=1620.0,
        time_to_interactive=2100.75,
        bundle_size_bytes=87040,
        island_hydrations=(
            HydrationEvent(component_name="TaskFilter", start_time=45.0, end_time=90.0),
            HydrationEvent(component_name="TaskList", start_time=120.0, end_time=150.0),
            HydrationEvent(component_name="UserMenu", start_time=300.0, end_time=340.0),
        ),
    )


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client):
            async with asgi_test_client(app) as client:
                response = await client.get("/endpoint")
    """
    if httpx is None:
        pytest.skip("httpx not installed")

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client
