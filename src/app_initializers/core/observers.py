# src/app_initializers/core/observers.py

from __future__ import annotations

import logging

from .models import InitializationState
from .ports import NullEventsObserver

logger = logging.getLogger(__name__)


class LoggingEventsObserver(NullEventsObserver):
    """Observer that writes every initialization event to the log."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger
        self.executed = 0
        self.skipped = 0

    def launch_phase_started(self) -> None:
        self._log.info("Launch initializers started.")

    def launch_phase_completed(self, state: InitializationState) -> None:
        self._log.info("Launch initializers finished: %s", state)

    def active_phase_started(self) -> None:
        self._log.info("Active initializers started.")

    def active_phase_completed(self, state: InitializationState) -> None:
        self._log.info("Active initializers finished: %s", state)

    def task_skipped(self) -> None:
        self.skipped += 1
        self._log.debug("Initializer skipped (total skipped=%d)", self.skipped)

    def task_executed(self) -> None:
        self.executed += 1
        self._log.debug("Initializer executed (total executed=%d)", self.executed)
