# src/app_initializers/core/state_store.py

from __future__ import annotations

"""
State store.

StateSubject keeps the latest InitializationState and broadcasts every new one:
- subscribe(callback) replays the current value, then every send()
- values() is an async iterator with the same semantics, for coroutine consumers

CompositeStateSubject derives the overall state from the launch and active
subjects; it is never written directly.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable

from .models import PENDING, InitializationState, combine_states

logger = logging.getLogger(__name__)

StateCallback = Callable[[InitializationState], None]


class StateSubject:
    def __init__(self, name: str, initial: InitializationState = PENDING) -> None:
        self.name = name
        self._value = initial
        self._callbacks: list[StateCallback] = []
        self._queues: list[asyncio.Queue[InitializationState]] = []

    @property
    def value(self) -> InitializationState:
        return self._value

    def send(self, state: InitializationState) -> None:
        self._value = state
        logger.debug("%s state -> %s", self.name, state)

        for cb in list(self._callbacks):
            try:
                cb(state)
            except Exception:
                logger.exception("%s state subscriber failed", self.name)

        for q in list(self._queues):
            q.put_nowait(state)

    def subscribe(self, callback: StateCallback) -> Callable[[], None]:
        """Register `callback`, call it with the current value, return an unsubscribe function."""
        self._callbacks.append(callback)
        try:
            callback(self._value)
        except Exception:
            logger.exception("%s state subscriber failed on replay", self.name)

        def _unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return _unsubscribe

    async def values(self) -> AsyncIterator[InitializationState]:
        q: asyncio.Queue[InitializationState] = asyncio.Queue()
        q.put_nowait(self._value)
        self._queues.append(q)
        try:
            while True:
                yield await q.get()
        finally:
            self._queues.remove(q)


class CompositeStateSubject(StateSubject):
    """Overall state: FAILED if either phase failed, COMPLETE if both completed, else PENDING."""

    def __init__(self, launch: StateSubject, active: StateSubject) -> None:
        super().__init__("composite", combine_states(launch.value, active.value))
        self._launch = launch
        self._active = active
        launch.subscribe(self._recompute)
        active.subscribe(self._recompute)

    def _recompute(self, _state: InitializationState) -> None:
        self.send(combine_states(self._launch.value, self._active.value))
