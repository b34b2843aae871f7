# tests/conftest.py

from __future__ import annotations

from collections.abc import Hashable

import pytest

from .fakes import RecordingObserver


@pytest.fixture()
def run_log() -> list[Hashable]:
    """Shared, ordered record of which initializers ran."""
    return []


@pytest.fixture()
def observer() -> RecordingObserver:
    return RecordingObserver()
