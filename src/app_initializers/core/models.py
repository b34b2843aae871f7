# src/app_initializers/core/models.py

from __future__ import annotations

"""
Value types shared by the scheduling core.

InitializationState is compared coarsely: two FAILED states are equal no matter
which error they carry. Observers only care about the kind of state; the error is
there for diagnostics.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum, StrEnum


class InitializerPriority(IntEnum):
    """When during the app lifecycle an initializer runs."""

    APP_LAUNCH = 10  # once, at process start
    APP_ACTIVE = 20  # every time the app becomes active

    @classmethod
    def parse(cls, raw: str) -> InitializerPriority:
        key = (raw or "").strip().lower()
        if key in ("launch", "app_launch"):
            return cls.APP_LAUNCH
        if key in ("active", "app_active"):
            return cls.APP_ACTIVE
        raise ValueError(f"Unknown initializer priority: {raw!r}")


class StateKind(StrEnum):
    PENDING = "pending"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class InitializationState:
    kind: StateKind
    error: BaseException | None = field(default=None, compare=False)

    @classmethod
    def pending(cls) -> InitializationState:
        return PENDING

    @classmethod
    def complete(cls) -> InitializationState:
        return COMPLETE

    @classmethod
    def failed(cls, error: BaseException) -> InitializationState:
        return cls(StateKind.FAILED, error)

    @property
    def is_pending(self) -> bool:
        return self.kind is StateKind.PENDING

    @property
    def is_complete(self) -> bool:
        return self.kind is StateKind.COMPLETE

    @property
    def is_failed(self) -> bool:
        return self.kind is StateKind.FAILED

    def __str__(self) -> str:
        return self.kind.value.capitalize()


PENDING = InitializationState(StateKind.PENDING)
COMPLETE = InitializationState(StateKind.COMPLETE)


def combine_states(launch: InitializationState, active: InitializationState) -> InitializationState:
    """
    Fold the two phase states into one overall state.

    - FAILED if either phase failed (launch's error wins when both did)
    - COMPLETE only when both phases completed
    - PENDING otherwise
    """
    if launch.is_failed:
        return launch
    if active.is_failed:
        return active
    if launch.is_complete and active.is_complete:
        return COMPLETE
    return PENDING


class ScenePhase(StrEnum):
    """Host scene phases, as reported by UI frameworks."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    BACKGROUND = "background"


class LifecycleEvent(Enum):
    FOREGROUND = "foreground"
    BACKGROUND = "background"
