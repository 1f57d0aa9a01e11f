"""
Per-generation cooperative cancellation.
"""

from typing import Callable, List


class CancellationToken:
    """One-shot flag moving from active to cancelled, never back.

    Abort callbacks registered with ``add_callback`` run exactly once, when the
    token is cancelled (or immediately if it already is).
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._callbacks: List[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> bool:
        """Signal cancellation. Returns False if the token was already cancelled."""
        if self._cancelled:
            return False
        self._cancelled = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()
        return True

    def add_callback(self, callback: Callable[[], None]) -> None:
        if self._cancelled:
            callback()
            return
        self._callbacks.append(callback)
