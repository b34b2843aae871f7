# src/app_initializers/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations:
- Initializer: one unit of startup work, supplied by the application
- InitEventsObserver: analytics/tracing hooks, all optional
"""

from collections.abc import Hashable, Sequence
from typing import Protocol, runtime_checkable

from .models import InitializationState, InitializerPriority

InitializerId = Hashable
# Caller-assigned identity (str / enum member / int). Used as the key everywhere.


@runtime_checkable
class Initializer(Protocol):
    """
    A single app startup task.

    Only list a dependency when this initializer really needs the other one to have
    finished first; artificial dependencies make cycles and missing-dependency errors
    more likely.
    """

    @property
    def id(self) -> InitializerId: ...

    @property
    def priority(self) -> InitializerPriority: ...

    @property
    def dependencies(self) -> Sequence[InitializerId]: ...

    async def run(self) -> None: ...


class InitEventsObserver(Protocol):
    def launch_phase_started(self) -> None: ...
    def launch_phase_completed(self, state: InitializationState) -> None: ...
    def active_phase_started(self) -> None: ...
    def active_phase_completed(self, state: InitializationState) -> None: ...
    def task_skipped(self) -> None: ...
    def task_executed(self) -> None: ...


class NullEventsObserver:
    """
    No-op implementation of InitEventsObserver.

    Subclass it and override only the hooks you care about.
    """

    def launch_phase_started(self) -> None:
        pass

    def launch_phase_completed(self, state: InitializationState) -> None:
        pass

    def active_phase_started(self) -> None:
        pass

    def active_phase_completed(self, state: InitializationState) -> None:
        pass

    def task_skipped(self) -> None:
        pass

    def task_executed(self) -> None:
        pass
