"""Tests for RefreshScheduler driven by a manual tick source."""

import logging

import pytest

from islandmetrics.core.models import MetricSnapshot
from islandmetrics.core.scheduler import RefreshScheduler, SchedulerState

pytestmark = [pytest.mark.core, pytest.mark.tier(0)]


@pytest.fixture
def received() -> list[MetricSnapshot]:
    return []


@pytest.fixture
def scheduler(collector, manual_timer) -> RefreshScheduler:
    return RefreshScheduler(collector, manual_timer, "home")


class TestStart:
    """Tests for start()."""

    def test_starts_idle(self, scheduler) -> None:
        """A new scheduler has no timer armed."""
        assert scheduler.state is SchedulerState.IDLE
        assert not scheduler.is_running

    @pytest.mark.tra("Core.Scheduler.Start.Immediate")
    def test_start_collects_immediately(
        self, scheduler, manual_timer, received
    ) -> None:
        """The first snapshot is delivered before any tick."""
        handle = scheduler.start(5000, received.append)

        assert scheduler.state is SchedulerState.RUNNING
        assert len(received) == 1
        assert received[0].page_name == "home"
        assert handle.interval_ms == 5000
        assert len(manual_timer.pending) == 1

    def test_collects_every_interval(self, scheduler, manual_timer, received) -> None:
        """Each elapsed interval produces one more snapshot."""
        scheduler.start(5000, received.append)

        manual_timer.advance(4999)
        assert len(received) == 1
        manual_timer.advance(1)
        assert len(received) == 2
        manual_timer.advance(10_000)
        assert len(received) == 4
        assert scheduler.ticks == 4

    @pytest.mark.tra("Core.Scheduler.LateHydration")
    def test_late_hydration_is_picked_up(
        self, scheduler, manual_timer, received, hydrate
    ) -> None:
        """An island finishing after the first pass appears on the next tick."""
        scheduler.start(5000, received.append)
        hydrate("LazyChart", start=2000, end=2600)

        manual_timer.advance(5000)

        assert received[0].island_hydrations == ()
        assert [e.component_name for e in received[1].island_hydrations] == [
            "LazyChart"
        ]

    def test_restart_while_running_returns_existing_handle(
        self, scheduler, manual_timer, received
    ) -> None:
        """A re-entrant start() neither collects nor arms a second timer."""
        first = scheduler.start(5000, received.append)
        second = scheduler.start(1000, lambda s: None)

        assert second is first
        assert len(received) == 1
        assert len(manual_timer.pending) == 1

    @pytest.mark.parametrize("interval", [0, -5, float("nan")])
    def test_non_positive_interval_raises(self, scheduler, interval) -> None:
        """The interval is validated before any state change."""
        with pytest.raises(ValueError, match="must be positive"):
            scheduler.start(interval, lambda s: None)

        assert scheduler.state is SchedulerState.IDLE

    def test_failing_callback_keeps_loop_alive(
        self, scheduler, manual_timer, caplog
    ) -> None:
        """A raising callback is logged and the next tick still fires."""
        calls: list[MetricSnapshot] = []

        def callback(snapshot: MetricSnapshot) -> None:
            calls.append(snapshot)
            raise RuntimeError("render failed")

        with caplog.at_level(logging.ERROR):
            scheduler.start(100, callback)
            manual_timer.advance(100)

        assert len(calls) == 2
        assert scheduler.is_running
        assert "Snapshot callback failed" in caplog.text


class TestStop:
    """Tests for stop()."""

    @pytest.mark.tra("Core.Scheduler.Stop.Idempotent")
    def test_stop_twice_is_safe(self, scheduler, received) -> None:
        """stop() can be called repeatedly and leaves the scheduler idle."""
        scheduler.start(5000, received.append)

        scheduler.stop()
        scheduler.stop()

        assert scheduler.state is SchedulerState.IDLE

    def test_stop_when_never_started(self, scheduler) -> None:
        """stop() on an idle scheduler is a no-op."""
        scheduler.stop()

        assert scheduler.state is SchedulerState.IDLE

    @pytest.mark.tra("Core.Scheduler.Stop.NoStragglers")
    def test_no_callback_after_stop(self, scheduler, manual_timer, received) -> None:
        """Stopping cancels the pending tick."""
        scheduler.start(5000, received.append)
        scheduler.stop()

        manual_timer.advance(60_000)

        assert len(received) == 1
        assert manual_timer.pending == []

    def test_stale_tick_is_discarded(self, scheduler, manual_timer, received) -> None:
        """A tick from a previous run does nothing if it fires anyway."""
        scheduler.start(5000, received.append)
        stale = manual_timer.pending[0]
        scheduler.stop()

        stale.callback()

        assert len(received) == 1

    def test_callback_may_stop_scheduler(self, scheduler, manual_timer) -> None:
        """Stopping from inside the callback arms no further tick."""
        received: list[MetricSnapshot] = []

        def callback(snapshot: MetricSnapshot) -> None:
            received.append(snapshot)
            if len(received) == 2:
                scheduler.stop()

        scheduler.start(100, callback)
        manual_timer.advance(1000)

        assert len(received) == 2
        assert scheduler.state is SchedulerState.IDLE
        assert manual_timer.pending == []

    def test_restart_after_stop(self, scheduler, manual_timer, received) -> None:
        """A stopped scheduler can be started again with a new handle."""
        first = scheduler.start(5000, received.append)
        scheduler.stop()
        second = scheduler.start(1000, received.append)
        manual_timer.advance(1000)

        assert second.generation > first.generation
        assert second.interval_ms == 1000
        assert len(received) == 3
