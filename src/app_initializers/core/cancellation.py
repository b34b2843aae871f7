# src/app_initializers/core/cancellation.py

from __future__ import annotations


class CancellationToken:
    """
    Cooperative cancellation flag owned by one phase run.

    Nothing is interrupted: the phase loop and the resolver poll `cancelled`
    before starting new work, and a run() already in flight finishes normally.
    """

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> bool:
        """Request cancellation. Returns False if it was already requested."""
        if self._cancelled:
            return False
        self._cancelled = True
        return True

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self._cancelled})"
