"""Tick sources implementing TimerPort."""

from islandmetrics.adapters.timers.asyncio_timer import AsyncioTimer

__all__ = ["AsyncioTimer"]
