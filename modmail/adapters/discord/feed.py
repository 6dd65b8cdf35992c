"""Queue-backed realtime feed fed by discord.py gateway listeners."""

import asyncio
import math
from typing import Callable, Optional

from modmail.ports.outbound import FeedError


class DiscordFeed:
    """EventFeed implementation: listeners publish, the dispatcher consumes."""

    def __init__(self, latency: Optional[Callable[[], float]] = None):
        self._queue: asyncio.Queue = asyncio.Queue()
        self._latency = latency or (lambda: math.nan)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, event: object) -> None:
        if self._closed:
            return
        self._queue.put_nowait(event)

    def fail(self, message: str, fatal: bool = False) -> None:
        if self._closed:
            return
        if fatal:
            self._closed = True
        self._queue.put_nowait(FeedError(message, fatal=fatal))

    def close(self, reason: str = "client closed") -> None:
        self.fail(reason, fatal=True)

    async def next_event(self) -> object:
        item = await self._queue.get()
        if isinstance(item, FeedError):
            raise item
        return item

    def latency(self) -> float:
        return self._latency()
