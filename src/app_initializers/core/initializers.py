# src/app_initializers/core/initializers.py

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field

from .models import InitializerPriority
from .ports import InitializerId

RunFn = Callable[[], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class FunctionInitializer:
    """Initializer backed by a plain coroutine function."""

    id: InitializerId
    func: RunFn = field(repr=False)
    priority: InitializerPriority = InitializerPriority.APP_LAUNCH
    dependencies: tuple[InitializerId, ...] = ()

    async def run(self) -> None:
        await self.func()


def initializer(
        initializer_id: InitializerId,
        *,
        priority: InitializerPriority = InitializerPriority.APP_LAUNCH,
        depends_on: Iterable[InitializerId] = (),
) -> Callable[[RunFn], FunctionInitializer]:
    """
    Decorator form:

        @initializer("db", depends_on=["config"])
        async def open_db() -> None: ...

    The decorated name is bound to the FunctionInitializer, ready to register.
    """
    deps = tuple(depends_on)

    def _wrap(func: RunFn) -> FunctionInitializer:
        return FunctionInitializer(id=initializer_id, func=func, priority=priority, dependencies=deps)

    return _wrap
