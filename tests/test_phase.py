# tests/test_phase.py

from __future__ import annotations

import pytest

from app_initializers.core.cancellation import CancellationToken
from app_initializers.core.errors import CircularDependencyError, InitializerFailedError
from app_initializers.core.phase import PhaseExecutor
from app_initializers.core.registry import InitializerRegistry
from app_initializers.core.resolver import DependencyResolver

from .fakes import FailingInitializer, RecordingInitializer


def _executor(items) -> PhaseExecutor:
    return PhaseExecutor(DependencyResolver(InitializerRegistry(items), set()))


def _assert_topological(order, items) -> None:
    pos = {init_id: i for i, init_id in enumerate(order)}
    for item in items:
        for dep in item.dependencies:
            assert pos[dep] < pos[item.id], f"{dep} should run before {item.id}"


@pytest.mark.asyncio
async def test_phase_order_is_topological(run_log) -> None:
    graph = {
        "ui": ("theme", "fonts", "api"),
        "api": ("auth", "config"),
        "auth": ("config", "keychain"),
        "theme": ("config",),
        "fonts": (),
        "keychain": (),
        "config": (),
    }
    items = [RecordingInitializer(k, run_log, dependencies=v) for k, v in graph.items()]

    await _executor(items).run_phase(items, CancellationToken())

    assert sorted(run_log) == sorted(graph)
    assert len(run_log) == len(graph)
    _assert_topological(run_log, items)


@pytest.mark.asyncio
async def test_independent_initializers_keep_registration_order(run_log) -> None:
    items = [RecordingInitializer(k, run_log) for k in ("c", "a", "b")]

    await _executor(items).run_phase(items, CancellationToken())

    assert run_log == ["c", "a", "b"]


@pytest.mark.asyncio
async def test_shared_dependency_between_descriptors_is_not_a_cycle(run_log) -> None:
    base = RecordingInitializer("base", run_log)
    x = RecordingInitializer("x", run_log, dependencies=("base",))
    y = RecordingInitializer("y", run_log, dependencies=("base",))
    items = [x, y, base]

    await _executor(items).run_phase(items, CancellationToken())

    assert run_log == ["base", "x", "y"]


@pytest.mark.asyncio
async def test_first_failure_aborts_the_phase(run_log) -> None:
    ok = RecordingInitializer("ok", run_log)
    bad = FailingInitializer("bad", run_log)
    later = RecordingInitializer("later", run_log)
    items = [ok, bad, later]

    with pytest.raises(InitializerFailedError):
        await _executor(items).run_phase(items, CancellationToken())

    assert run_log == ["ok", "bad"]
    assert later.runs == 0


@pytest.mark.asyncio
async def test_cycle_aborts_the_phase(run_log) -> None:
    a = RecordingInitializer("a", run_log, dependencies=("b",))
    b = RecordingInitializer("b", run_log, dependencies=("a",))
    c = RecordingInitializer("c", run_log)
    items = [a, b, c]

    with pytest.raises(CircularDependencyError):
        await _executor(items).run_phase(items, CancellationToken())
    assert run_log == []


@pytest.mark.asyncio
async def test_cancelled_phase_stops_without_error(run_log) -> None:
    items = [RecordingInitializer(k, run_log) for k in ("a", "b")]
    token = CancellationToken()
    token.cancel()

    await _executor(items).run_phase(items, token)

    assert run_log == []
