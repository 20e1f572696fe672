"""BDD step definitions for hydration measurement features."""

from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from islandmetrics.core.collector import MetricCollector
from islandmetrics.core.models import MetricSnapshot
from islandmetrics.core.registry import HydrationRegistry
from islandmetrics.core.report import slow_islands
from islandmetrics.core.scheduler import RefreshScheduler, SchedulerState
from tests.fakes import ManualTimer, ScriptedTimingSource


@dataclass
class HydrationScenarioContext:
    """Shared state between the steps of one scenario."""

    timing: ScriptedTimingSource = field(default_factory=ScriptedTimingSource)
    timer: ManualTimer = field(default_factory=ManualTimer)
    registry: HydrationRegistry | None = None
    collector: MetricCollector | None = None
    scheduler: RefreshScheduler | None = None
    interval_ms: float = 5000.0
    snapshot: MetricSnapshot | None = None
    delivered: list[MetricSnapshot] = field(default_factory=list)


@pytest.fixture
def ctx() -> HydrationScenarioContext:
    """Fresh scenario context for each test."""
    return HydrationScenarioContext()


def _names(snapshot: MetricSnapshot) -> list[str]:
    return [e.component_name for e in snapshot.island_hydrations]


def _split(names: str) -> list[str]:
    return [n.strip() for n in names.split(",") if n.strip()]


# === Background Steps ===
@given("a fresh hydration registry")
def step_registry(ctx: HydrationScenarioContext) -> None:
    ctx.registry = HydrationRegistry(ctx.timing).init()
    ctx.collector = MetricCollector(ctx.registry, ctx.timing)


@given(parsers.parse('a refresh scheduler for page "{page}" every {interval:d} ms'))
def step_scheduler(ctx: HydrationScenarioContext, page: str, interval: int) -> None:
    ctx.scheduler = RefreshScheduler(ctx.collector, ctx.timer, page)
    ctx.interval_ms = interval


# === Hydration Steps ===
@given(parsers.parse('island "{name}" hydrates from {start:d} to {end:d}'))
@when(parsers.parse('island "{name}" hydrates from {start:d} to {end:d}'))
def step_hydrates(
    ctx: HydrationScenarioContext, name: str, start: int, end: int
) -> None:
    ctx.timing.set_time(start)
    ctx.registry.mark_start(name)
    ctx.timing.set_time(end)
    ctx.registry.mark_end(name)


@given(parsers.parse('island "{name}" starts hydrating at {time:d}'))
def step_starts(ctx: HydrationScenarioContext, name: str, time: int) -> None:
    ctx.timing.set_time(time)
    ctx.registry.mark_start(name)


@given(parsers.parse('island "{name}" finishes hydrating at {time:d}'))
@when(parsers.parse('island "{name}" finishes hydrating at {time:d}'))
def step_finishes(ctx: HydrationScenarioContext, name: str, time: int) -> None:
    ctx.timing.set_time(time)
    ctx.registry.mark_end(name)


@when(parsers.parse('metrics are collected for page "{page}"'))
def step_collect(ctx: HydrationScenarioContext, page: str) -> None:
    ctx.snapshot = ctx.collector.collect(page)


# === Scheduler Steps ===
@when("the scheduler is started")
def step_start(ctx: HydrationScenarioContext) -> None:
    ctx.scheduler.start(ctx.interval_ms, ctx.delivered.append)


@when("the scheduler is stopped")
def step_stop(ctx: HydrationScenarioContext) -> None:
    ctx.scheduler.stop()


@when(parsers.parse("{ms:d} ms pass"))
def step_time_passes(ctx: HydrationScenarioContext, ms: int) -> None:
    ctx.timer.advance(ms)


# === Assertions ===
@then(parsers.parse('the snapshot lists islands "{names}"'))
def step_lists(ctx: HydrationScenarioContext, names: str) -> None:
    assert _names(ctx.snapshot) == _split(names)


@then("the snapshot lists no islands")
def step_lists_none(ctx: HydrationScenarioContext) -> None:
    assert _names(ctx.snapshot) == []


@then(parsers.parse('island "{name}" took {ms:d} ms'))
def step_took(ctx: HydrationScenarioContext, name: str, ms: int) -> None:
    [event] = [e for e in ctx.snapshot.island_hydrations if e.component_name == name]
    assert event.duration_ms == ms


@then(parsers.parse('the slow islands are "{names}"'))
def step_slow(ctx: HydrationScenarioContext, names: str) -> None:
    assert [e.component_name for e in slow_islands(ctx.snapshot)] == _split(names)


@then(parsers.parse("{count:d} snapshots were delivered"))
def step_delivered(ctx: HydrationScenarioContext, count: int) -> None:
    assert len(ctx.delivered) == count


@then("the first snapshot lists no islands")
def step_first_empty(ctx: HydrationScenarioContext) -> None:
    assert _names(ctx.delivered[0]) == []


@then(parsers.parse('the latest snapshot lists islands "{names}"'))
def step_latest(ctx: HydrationScenarioContext, names: str) -> None:
    assert _names(ctx.delivered[-1]) == _split(names)


@then("the scheduler is idle")
def step_idle(ctx: HydrationScenarioContext) -> None:
    assert ctx.scheduler.state is SchedulerState.IDLE
