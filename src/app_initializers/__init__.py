"""Dependency-ordered app startup initializers, run at launch and on every activation."""

from .core.cancellation import CancellationToken
from .core.errors import (
    AppInitializationError,
    CircularDependencyError,
    DuplicateInitializerError,
    InitializerFailedError,
    MissingDependencyError,
)
from .core.initializers import FunctionInitializer, initializer
from .core.models import (
    COMPLETE,
    PENDING,
    InitializationState,
    InitializerPriority,
    LifecycleEvent,
    ScenePhase,
    StateKind,
)
from .core.observers import LoggingEventsObserver
from .core.ports import InitEventsObserver, Initializer, NullEventsObserver
from .core.registry import InitializerRegistry
from .core.state_store import StateSubject
from .manager import InitManager

__all__ = [
    "AppInitializationError",
    "CancellationToken",
    "CircularDependencyError",
    "COMPLETE",
    "DuplicateInitializerError",
    "FunctionInitializer",
    "InitEventsObserver",
    "InitManager",
    "InitializationState",
    "Initializer",
    "InitializerFailedError",
    "InitializerPriority",
    "InitializerRegistry",
    "LifecycleEvent",
    "LoggingEventsObserver",
    "MissingDependencyError",
    "NullEventsObserver",
    "PENDING",
    "ScenePhase",
    "StateKind",
    "StateSubject",
    "initializer",
]
