"""BDD step definitions for snapshot windowing and retention features."""

import asyncio
import re
import time
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when
from tests.helpers import METRICS_KEY, NOW, CountingStore, FakeCache

from cachestats.core.config import MetricsConfig
from cachestats.core.models import Snapshot
from cachestats.core.service import CacheMetrics


@dataclass
class RetentionScenarioContext:
    """Shared state between steps in a retention scenario."""

    store: CountingStore = field(default_factory=CountingStore)
    config: MetricsConfig = field(default_factory=MetricsConfig)
    metrics: CacheMetrics | None = None
    written: dict[int, list[Snapshot]] = field(default_factory=dict)
    result: list[Snapshot] = field(default_factory=list)


@pytest.fixture
def ctx() -> RetentionScenarioContext:
    """Fresh scenario context for each test."""
    return RetentionScenarioContext()


def run_async(coro: Any) -> Any:
    """Run a coroutine synchronously."""
    return asyncio.run(coro)


def parse_ages(text: str) -> list[int]:
    """Turn "3600, 1800 and 30" into [3600, 1800, 30]."""
    return [int(n) for n in re.findall(r"\d+", text)]


def set_clock(monkeypatch: pytest.MonkeyPatch, timestamp: int) -> None:
    monkeypatch.setattr(time, "time", lambda: float(timestamp))


def _metrics(ctx: RetentionScenarioContext) -> CacheMetrics:
    if ctx.metrics is None:
        ctx.metrics = CacheMetrics(FakeCache(ctx.store), ctx.config)
    return ctx.metrics


def _record_at(
    ctx: RetentionScenarioContext, monkeypatch: pytest.MonkeyPatch, age: int
) -> None:
    set_clock(monkeypatch, NOW - age)
    snapshot = run_async(_metrics(ctx).record())
    ctx.written.setdefault(age, []).append(snapshot)


# === Background Steps ===
@given(
    parsers.parse(
        "an active cache metrics recorder with a retention horizon of {seconds:d} seconds"
    )
)
def step_recorder(ctx: RetentionScenarioContext, seconds: int) -> None:
    ctx.config = MetricsConfig(max_time_override=seconds)


@given("metrics are disabled")
def step_disabled(ctx: RetentionScenarioContext) -> None:
    ctx.config = MetricsConfig(disabled=True)
    ctx.metrics = None


# === Setup Steps ===
@given(parsers.parse("snapshots recorded {ages} seconds ago"))
def step_snapshots(
    ctx: RetentionScenarioContext, monkeypatch: pytest.MonkeyPatch, ages: str
) -> None:
    for age in parse_ages(ages):
        _record_at(ctx, monkeypatch, age)
    ctx.store.calls.clear()


@given(parsers.parse("{count:d} snapshots recorded {age:d} seconds ago"))
def step_n_snapshots(
    ctx: RetentionScenarioContext,
    monkeypatch: pytest.MonkeyPatch,
    count: int,
    age: int,
) -> None:
    for _ in range(count):
        _record_at(ctx, monkeypatch, age)
    ctx.store.calls.clear()


@given(parsers.parse("a foreign payload stored {age:d} seconds ago"))
def step_foreign_payload(ctx: RetentionScenarioContext, age: int) -> None:
    run_async(ctx.store.add_scored(METRICS_KEY, NOW - age, "legacy:1:2:3"))
    ctx.store.calls.clear()


# === Action Steps ===
@when("a snapshot is recorded")
def step_record(ctx: RetentionScenarioContext, monkeypatch: pytest.MonkeyPatch) -> None:
    set_clock(monkeypatch, NOW)
    run_async(_metrics(ctx).record())


@when(parsers.parse("the last {seconds:d} seconds are read"))
def step_read(
    ctx: RetentionScenarioContext, monkeypatch: pytest.MonkeyPatch, seconds: int
) -> None:
    set_clock(monkeypatch, NOW)
    ctx.result = run_async(_metrics(ctx).get(seconds))


@when(parsers.parse("expired snapshots are discarded {delay:d} second later"))
@when(parsers.parse("expired snapshots are discarded {delay:d} seconds later"))
def step_discard(
    ctx: RetentionScenarioContext, monkeypatch: pytest.MonkeyPatch, delay: int
) -> None:
    set_clock(monkeypatch, NOW + delay)
    run_async(_metrics(ctx).discard())


# === Assertion Steps ===
@then(parsers.parse("the snapshots recorded {ages} seconds ago are returned"))
def step_returned(ctx: RetentionScenarioContext, ages: str) -> None:
    expected = [s for age in parse_ages(ages) for s in ctx.written[age]]
    assert ctx.result == expected


@then(parsers.parse("{count:d} snapshots are returned"))
def step_n_returned(ctx: RetentionScenarioContext, count: int) -> None:
    assert len(ctx.result) == count
    assert len({s.id for s in ctx.result}) == count


@then("no snapshots are returned")
def step_none_returned(ctx: RetentionScenarioContext) -> None:
    assert ctx.result == []


@then(parsers.parse("the store holds the snapshots recorded {ages} seconds ago"))
def step_store_holds(ctx: RetentionScenarioContext, ages: str) -> None:
    entries = run_async(ctx.store.range_by_score(METRICS_KEY, 0, NOW + 3600))
    remaining = sorted(NOW - int(score) for _, score in entries)
    expected = sorted(
        age for age in parse_ages(ages) for _ in ctx.written.get(age, [])
    )
    assert remaining == expected


@then("no store operation was made")
def step_no_store_calls(ctx: RetentionScenarioContext) -> None:
    assert ctx.store.calls == []
