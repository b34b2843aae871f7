# src/app_initializers/core/phase.py

from __future__ import annotations

import logging
from collections.abc import Sequence

from .cancellation import CancellationToken
from .ports import Initializer, InitializerId
from .resolver import DependencyResolver

logger = logging.getLogger(__name__)


class PhaseExecutor:
    """
    Runs the initializers of one priority class, strictly one at a time.

    Each initializer's dependency subtree is fully resolved before the next
    initializer in the sequence starts.
    """

    def __init__(self, resolver: DependencyResolver) -> None:
        self.resolver = resolver

    async def run_phase(self, initializers: Sequence[Initializer], token: CancellationToken) -> None:
        """
        Resolve `initializers` in order.

        Stops quietly when `token` is cancelled; the first resolution error aborts
        the phase and propagates.
        """
        for initializer in initializers:
            if token.cancelled:
                logger.info("Phase cancelled before initializer %r", initializer.id)
                break

            in_progress: list[InitializerId] = []
            await self.resolver.resolve(initializer, in_progress, token)
