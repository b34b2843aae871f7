# tests/test_manifest.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from app_initializers.cli.manifest import (
    SAMPLE_MANIFEST,
    ManifestError,
    SimulatedInitializerError,
    load_manifest,
    parse_manifest,
)
from app_initializers.core.errors import InitializerFailedError
from app_initializers.core.models import COMPLETE, InitializerPriority
from app_initializers.manager import InitManager


def test_sample_manifest_parses() -> None:
    items = parse_manifest(SAMPLE_MANIFEST)
    by_id = {i.id: i for i in items}

    assert [i.id for i in items] == ["config", "logging", "database", "session", "feature_flags"]
    assert by_id["database"].dependencies == ("config", "logging")
    assert by_id["session"].priority is InitializerPriority.APP_ACTIVE


def test_load_manifest_from_file(tmp_path: Path) -> None:
    path = tmp_path / "manifest.json"
    path.write_text(
        json.dumps({"initializers": [{"id": "a"}, {"id": "b", "priority": "active", "depends_on": ["a"]}]}),
        "utf-8",
    )

    items = load_manifest(path)

    assert [(i.id, i.priority) for i in items] == [
        ("a", InitializerPriority.APP_LAUNCH),
        ("b", InitializerPriority.APP_ACTIVE),
    ]


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"initializers": "nope"},
        {"initializers": [42]},
        {"initializers": [{"id": ""}]},
        {"initializers": [{"id": "a", "priority": "sometimes"}]},
        {"initializers": [{"id": "a", "depends_on": "b"}]},
        {"initializers": [{"id": "a", "delay": "slow"}]},
    ],
)
def test_invalid_manifests_are_rejected(data) -> None:
    with pytest.raises(ManifestError):
        parse_manifest(data)


def test_unreadable_manifest(tmp_path: Path) -> None:
    with pytest.raises(ManifestError):
        load_manifest(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", "utf-8")
    with pytest.raises(ManifestError):
        load_manifest(bad)


@pytest.mark.asyncio
async def test_simulated_failure_fails_the_phase() -> None:
    items = parse_manifest(
        {
            "initializers": [
                {"id": "config"},
                {"id": "session", "priority": "active", "depends_on": ["config"], "fail": True},
            ]
        }
    )
    manager = InitManager(items)

    assert await manager.wait_for_launch() == COMPLETE
    manager.on_foreground()
    state = await manager.wait_for_active()

    assert state.is_failed
    assert isinstance(state.error, InitializerFailedError)
    assert isinstance(state.error.error, SimulatedInitializerError)
