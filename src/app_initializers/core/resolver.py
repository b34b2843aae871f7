# src/app_initializers/core/resolver.py

from __future__ import annotations

"""
Dependency resolver.

Runs one initializer after making sure its whole dependency closure has run.
Recursing into dependencies before executing the target always yields a valid
topological order, so initializers only need to declare immediate dependencies.
"""

import logging
from collections.abc import Callable

from .cancellation import CancellationToken
from .errors import CircularDependencyError, InitializerFailedError, MissingDependencyError
from .ports import Initializer, InitializerId
from .registry import InitializerRegistry

logger = logging.getLogger(__name__)


class DependencyResolver:
    def __init__(
            self,
            registry: InitializerRegistry,
            completed: set[InitializerId],
            *,
            on_skipped: Callable[[], None] | None = None,
            on_executed: Callable[[], None] | None = None,
    ) -> None:
        self.registry = registry
        self.completed = completed
        self._on_skipped = on_skipped
        self._on_executed = on_executed

    async def resolve(
            self,
            target: Initializer,
            in_progress: list[InitializerId],
            token: CancellationToken,
    ) -> None:
        """
        Resolve `target` and everything it depends on.

        `in_progress` holds the ids on the current resolution path; pass an empty
        list for each top-level call. Raises CircularDependencyError,
        MissingDependencyError or InitializerFailedError.
        """
        target_id = target.id

        if target_id in in_progress:
            raise CircularDependencyError(target_id)

        if target_id in self.completed:
            logger.debug("Initializer %r already completed, skipping", target_id)
            if self._on_skipped is not None:
                self._on_skipped()
            return

        in_progress.append(target_id)

        for dep_id in target.dependencies:
            dep = self.registry.get(dep_id)
            if dep is None:
                raise MissingDependencyError(dep_id)
            await self.resolve(dep, in_progress, token)

        if not token.cancelled:
            logger.debug("Running initializer %r", target_id)
            if self._on_executed is not None:
                self._on_executed()
            try:
                await target.run()
            except Exception as e:
                raise InitializerFailedError(target_id, e) from e

        in_progress.pop()
        self.completed.add(target_id)
