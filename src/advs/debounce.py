"""
Trailing-edge debounce timer for asyncio.
"""

import asyncio
from typing import Any, Callable, Optional


class Debouncer:
    """
    Coalesce rapid events and run ``callback`` once after a quiet period.

    Each ``schedule`` call cancels the pending timer and arms a new one with
    the latest arguments. Nothing runs on the leading edge.
    """

    def __init__(self, delay: float, callback: Callable[..., Any]):
        """
        Args:
            delay: Seconds to wait after the last event before firing.
            callback: Called with the arguments of the last ``schedule`` call.
        """
        self.delay = delay
        self.callback = callback
        self._timer: Optional[asyncio.Task] = None
        self.fired: int = 0

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def schedule(self, *args: Any) -> None:
        """Restart the timer. Must be called from a running event loop."""
        self.cancel()
        self._timer = asyncio.ensure_future(self._fire_later(args))

    def cancel(self) -> None:
        if self.pending:
            self._timer.cancel()
        self._timer = None

    async def wait(self) -> None:
        """Wait for the pending timer, if any, to fire or be cancelled."""
        while self.pending:
            timer = self._timer
            try:
                await asyncio.shield(timer)
            except asyncio.CancelledError:
                if not timer.cancelled():
                    raise

    async def _fire_later(self, args) -> None:
        await asyncio.sleep(self.delay)
        self.fired += 1
        self.callback(*args)
