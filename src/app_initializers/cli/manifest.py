# src/app_initializers/cli/manifest.py

"""
JSON manifest of simulated initializers, used by the demo console.

    {
      "initializers": [
        {"id": "config", "priority": "launch", "delay": 0.2},
        {"id": "db", "priority": "launch", "depends_on": ["config"]},
        {"id": "session", "priority": "active", "depends_on": ["db"], "fail": false}
      ]
    }

Each entry becomes a FunctionInitializer that sleeps for `delay` seconds and
raises SimulatedInitializerError when `fail` is true.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from ..core.initializers import FunctionInitializer, RunFn
from ..core.models import InitializerPriority

logger = logging.getLogger(__name__)


class ManifestError(ValueError):
    pass


class SimulatedInitializerError(RuntimeError):
    pass


SAMPLE_MANIFEST: dict[str, Any] = {
    "initializers": [
        {"id": "config", "priority": "launch", "delay": 0.2},
        {"id": "logging", "priority": "launch", "depends_on": ["config"], "delay": 0.1},
        {"id": "database", "priority": "launch", "depends_on": ["config", "logging"], "delay": 0.5},
        {"id": "session", "priority": "active", "depends_on": ["database"], "delay": 1.0},
        {"id": "feature_flags", "priority": "active", "depends_on": ["session"], "delay": 1.0},
    ]
}


def _simulated_run(initializer_id: str, delay: float, fail: bool) -> RunFn:
    async def _run() -> None:
        logger.info("[%s] working for %.2fs", initializer_id, delay)
        if delay > 0:
            await asyncio.sleep(delay)
        if fail:
            raise SimulatedInitializerError(f"{initializer_id} failed (simulated)")

    return _run


def _parse_entry(i: int, raw: Any) -> FunctionInitializer:
    if not isinstance(raw, dict):
        raise ManifestError(f"initializers[{i}] must be an object")

    init_id = raw.get("id")
    if not isinstance(init_id, str) or not init_id.strip():
        raise ManifestError(f"initializers[{i}].id must be a non-empty string")
    init_id = init_id.strip()

    try:
        priority = InitializerPriority.parse(str(raw.get("priority", "launch")))
    except ValueError as e:
        raise ManifestError(f"initializers[{i}]: {e}") from e

    deps = raw.get("depends_on", [])
    if not isinstance(deps, list) or not all(isinstance(d, str) for d in deps):
        raise ManifestError(f"initializers[{i}].depends_on must be a list of strings")

    try:
        delay = max(0.0, float(raw.get("delay", 0.0)))
    except (TypeError, ValueError) as e:
        raise ManifestError(f"initializers[{i}].delay must be a number") from e

    fail = bool(raw.get("fail", False))

    return FunctionInitializer(
        id=init_id,
        func=_simulated_run(init_id, delay, fail),
        priority=priority,
        dependencies=tuple(deps),
    )


def parse_manifest(data: Any) -> list[FunctionInitializer]:
    if not isinstance(data, dict) or not isinstance(data.get("initializers"), list):
        raise ManifestError("manifest must be an object with an 'initializers' list")
    return [_parse_entry(i, raw) for i, raw in enumerate(data["initializers"])]


def load_manifest(path: str | Path) -> list[FunctionInitializer]:
    path = Path(path)
    try:
        data = json.loads(path.read_text("utf-8"))
    except OSError as e:
        raise ManifestError(f"cannot read manifest {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"manifest {path} is not valid JSON: {e}") from e

    items = parse_manifest(data)
    logger.info("Loaded %d initializers from %s", len(items), path)
    return items
