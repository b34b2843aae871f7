# src/app_initializers/core/errors.py

from __future__ import annotations

from collections.abc import Hashable


class AppInitializationError(Exception):
    """Base class for everything that can fail a phase."""

    def __init__(self, initializer_id: Hashable, message: str) -> None:
        super().__init__(message)
        self.initializer_id = initializer_id


class CircularDependencyError(AppInitializationError):
    """The initializer was reached again while its own dependencies were being resolved."""

    def __init__(self, initializer_id: Hashable) -> None:
        super().__init__(initializer_id, f"Circular dependency detected at initializer {initializer_id!r}")


class MissingDependencyError(AppInitializationError):
    """
    A registered initializer lists a dependency that was never registered.

    Usually a new initializer was written but not passed to the InitManager.
    """

    def __init__(self, initializer_id: Hashable) -> None:
        super().__init__(initializer_id, f"Dependency {initializer_id!r} is not registered")


class InitializerFailedError(AppInitializationError):
    """The initializer's run() raised; the original exception is kept in .error and __cause__."""

    def __init__(self, initializer_id: Hashable, error: BaseException) -> None:
        super().__init__(initializer_id, f"Initializer {initializer_id!r} failed: {error!r}")
        self.error = error


class DuplicateInitializerError(AppInitializationError):
    def __init__(self, initializer_id: Hashable) -> None:
        super().__init__(initializer_id, f"Initializer {initializer_id!r} is registered more than once")
