# src/app_initializers/manager.py

"""
InitManager: runs registered initializers at the right moments of the app lifecycle.

- Launch initializers run once, as soon as the manager is created (or on_launch()).
- Active initializers run every time the app becomes active (on_foreground()),
  always in full, and only after launch initializers have finished.
- on_background() cancels a running active phase cooperatively.

The manager is confined to one asyncio event loop. Call the trigger methods from
that loop, or use post_event() from any other thread.

    manager = InitManager([LoadConfig(), OpenDatabase(), RefreshSession()])
    manager.state.subscribe(lambda s: print("init:", s))
    manager.on_foreground()
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from .core.cancellation import CancellationToken
from .core.errors import AppInitializationError
from .core.models import (
    COMPLETE,
    PENDING,
    InitializationState,
    InitializerPriority,
    LifecycleEvent,
    ScenePhase,
)
from .core.phase import PhaseExecutor
from .core.ports import InitEventsObserver, Initializer, InitializerId, NullEventsObserver
from .core.registry import InitializerRegistry
from .core.resolver import DependencyResolver
from .core.state_store import CompositeStateSubject, StateSubject

logger = logging.getLogger(__name__)


class InitManager:
    def __init__(
            self,
            initializers: Iterable[Initializer],
            observer: InitEventsObserver | None = None,
            *,
            autostart: bool = True,
    ) -> None:
        """
        Register ALL of the app's initializers with a single manager.

        With autostart=True (default) launch initializers are scheduled right away,
        which requires a running event loop.
        """
        self.registry = InitializerRegistry(initializers)
        self.observer: InitEventsObserver = observer or NullEventsObserver()

        self._completed: set[InitializerId] = set()
        self._resolver = DependencyResolver(
            self.registry,
            self._completed,
            on_skipped=lambda: self._notify("task_skipped"),
            on_executed=lambda: self._notify("task_executed"),
        )
        self._executor = PhaseExecutor(self._resolver)

        self.launch_state = StateSubject("launch")
        self.active_state = StateSubject("active")
        self.state = CompositeStateSubject(self.launch_state, self.active_state)

        self._loop: asyncio.AbstractEventLoop | None = None
        self._launch_task: asyncio.Task[None] | None = None
        self._active_task: asyncio.Task[None] | None = None
        # Tokens of every active cycle that has not finished yet (running or queued).
        self._active_tokens: set[CancellationToken] = set()

        if autostart:
            self.on_launch()

    @property
    def completed_ids(self) -> frozenset[InitializerId]:
        return frozenset(self._completed)

    # ---- triggers ----

    def on_launch(self) -> None:
        """Schedule the launch phase. Only the first call has an effect."""
        if self._launch_task is not None:
            logger.warning("Launch initializers were already started; ignoring on_launch().")
            return
        loop = self._bind_loop()
        self._launch_task = loop.create_task(self._run_launch(), name="init-launch")

    def on_foreground(self) -> None:
        """Start a new active cycle (the app entered the foreground)."""
        loop = self._bind_loop()
        previous = self._active_task
        token = CancellationToken()
        self._active_tokens.add(token)
        self.active_state.send(PENDING)
        self._active_task = loop.create_task(self._run_active(token, previous), name="init-active")

    def on_background(self) -> None:
        """Cancel every unfinished active cycle, running or queued (the app left the foreground)."""
        newly_cancelled = [t for t in list(self._active_tokens) if t.cancel()]
        if not newly_cancelled:
            return
        logger.info("Active initializers cancelled (app inactive, cycles=%d).", len(newly_cancelled))
        self._notify("active_phase_completed", self.active_state.value)

    def on_scene_phase_change(self, phase: ScenePhase | str) -> None:
        phase = ScenePhase(phase)
        if phase is ScenePhase.ACTIVE:
            self.on_foreground()
        else:
            self.on_background()

    def post_event(self, event: LifecycleEvent) -> None:
        """Thread-safe trigger: marshal a lifecycle event onto the manager's loop."""
        loop = self._loop
        if loop is None:
            raise RuntimeError("InitManager is not bound to an event loop yet")
        if event is LifecycleEvent.FOREGROUND:
            loop.call_soon_threadsafe(self.on_foreground)
        else:
            loop.call_soon_threadsafe(self.on_background)

    # ---- waiting ----

    async def wait_for_launch(self) -> InitializationState:
        if self._launch_task is not None:
            await asyncio.wait({self._launch_task})
        return self.launch_state.value

    async def wait_for_active(self) -> InitializationState:
        """Wait until the most recent active cycle (including ones queued meanwhile) is done."""
        task = self._active_task
        while task is not None:
            await asyncio.wait({task})
            if task is self._active_task:
                break
            task = self._active_task
        return self.active_state.value

    # ---- phases ----

    async def _run_launch(self) -> None:
        self.launch_state.send(PENDING)
        self._notify("launch_phase_started")
        logger.info("Running launch initializers.")

        try:
            await self._executor.run_phase(
                self.registry.filter_by(InitializerPriority.APP_LAUNCH),
                CancellationToken(),
            )
        except AppInitializationError as e:
            logger.warning("Launch initializers failed: %s", e)
            self.launch_state.send(InitializationState.failed(e))
        except Exception as e:
            logger.exception("Launch initializers crashed.")
            self.launch_state.send(InitializationState.failed(e))
        except asyncio.CancelledError as e:
            logger.warning("Launch initializers were cancelled.")
            self.launch_state.send(InitializationState.failed(e))
            raise
        else:
            logger.info("Launch initializers complete.")
            self.launch_state.send(COMPLETE)
        finally:
            self._notify("launch_phase_completed", self.launch_state.value)

    async def _run_active(self, token: CancellationToken, previous: asyncio.Task[None] | None) -> None:
        try:
            await self._run_active_cycle(token, previous)
        finally:
            self._active_tokens.discard(token)

    async def _run_active_cycle(self, token: CancellationToken, previous: asyncio.Task[None] | None) -> None:
        # Overlapping foreground triggers are queued behind the previous cycle.
        if previous is not None and not previous.done():
            await asyncio.wait({previous})
            # The previous cycle may have reported its own outcome meanwhile.
            if not self.active_state.value.is_pending:
                self.active_state.send(PENDING)

        # Don't run active initializers until launch initializers are done.
        if self._launch_task is not None and not self._launch_task.done():
            await asyncio.wait({self._launch_task})

        launch = self._settled_launch_state()
        if launch.is_failed:
            logger.info("Skipping active initializers: launch initializers failed.")
            self.active_state.send(launch)
            return

        if token.cancelled:
            logger.info("Active cycle cancelled before it started.")
            return

        self._notify("active_phase_started")
        logger.info("Running active initializers.")

        # Active initializers re-run on every cycle.
        self._completed.difference_update(self.registry.ids_for(InitializerPriority.APP_ACTIVE))

        try:
            await self._executor.run_phase(
                self.registry.filter_by(InitializerPriority.APP_ACTIVE),
                token,
            )
        except AppInitializationError as e:
            logger.warning("Active initializers failed: %s", e)
            self.active_state.send(InitializationState.failed(e))
        except Exception as e:
            logger.exception("Active initializers crashed.")
            self.active_state.send(InitializationState.failed(e))
        except asyncio.CancelledError as e:
            logger.warning("Active initializers were cancelled.")
            self.active_state.send(InitializationState.failed(e))
            self._notify("active_phase_completed", self.active_state.value)
            raise
        else:
            if token.cancelled:
                # on_background() already reported the current state.
                return
            logger.info("Active initializers complete.")
            self.active_state.send(COMPLETE)

        self._notify("active_phase_completed", self.active_state.value)

    # ---- helpers ----

    def _settled_launch_state(self) -> InitializationState:
        """
        Launch state once the launch task is done.

        A launch task that died without reaching COMPLETE/FAILED (e.g. cancelled
        before it ever ran) is recorded as FAILED so active work never starts.
        """
        state = self.launch_state.value
        task = self._launch_task
        if task is None or not task.done() or not state.is_pending:
            return state

        if task.cancelled():
            error: BaseException = asyncio.CancelledError("launch initializers were cancelled")
        else:
            error = task.exception() or RuntimeError("launch initializers ended without a result")
        logger.warning("Launch initializers did not finish: %r", error)
        state = InitializationState.failed(error)
        self.launch_state.send(state)
        return state

    def _bind_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def _notify(self, hook: str, *args: object) -> None:
        fn = getattr(self.observer, hook, None)
        if fn is None:
            return
        try:
            fn(*args)
        except Exception:
            logger.exception("Observer hook %s failed", hook)
