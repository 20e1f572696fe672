"""asyncio tick source for the refresh scheduler."""

import asyncio
from collections.abc import Callable


class AsyncioTimer:
    """Implementation of TimerPort backed by loop.call_later().

    Callbacks run on the event loop thread, one at a time, so the
    scheduler and the registry need no locking.

    Args:
        loop: Event loop to schedule on. Defaults to the running loop at
            the time call_later() is first used.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        """Get the configured loop or the running one (lazy to avoid loop issues)."""
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(
        self, delay_ms: float, callback: Callable[[], None]
    ) -> asyncio.TimerHandle:
        """Schedule callback after delay_ms milliseconds."""
        return self._get_loop().call_later(delay_ms / 1000, callback)
