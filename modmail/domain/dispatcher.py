"""Event dispatcher — single consumer of the realtime feed.

Each event is folded into the mirror before its handler is spawned, so a
handler always sees state up to and including its own event. Handlers run as
independent tasks; a slow remote call never blocks the next event.
"""

import asyncio
import sys
from typing import Awaitable, Callable, Optional, Set

from modmail.domain.commands import CommandProcessor
from modmail.domain.mirror import Mirror
from modmail.domain.relay import RelayEngine
from modmail.ports.inbound import InteractionCreated, MessageCreated, ReadyEvent
from modmail.ports.outbound import EventFeed, FeedError


def _log(msg: str):
    print(msg, file=sys.stderr)


class EventHandler:
    """Routes one feed event to the relay engine or the command processor."""

    def __init__(self, relay: RelayEngine, commands: CommandProcessor):
        self.relay = relay
        self.commands = commands

    async def __call__(self, event: object) -> None:
        if isinstance(event, ReadyEvent):
            _log(f"[dispatcher] feed ready as {event.user_name}")
        elif isinstance(event, MessageCreated):
            await self.relay.handle_message(event.message)
        elif isinstance(event, InteractionCreated):
            await self.commands.handle(event.invocation, event.responder)


class EventDispatcher:
    def __init__(
        self,
        feed: EventFeed,
        mirror: Mirror,
        handler: Callable[[object], Awaitable[None]],
        on_failure: Optional[Callable[[object, BaseException], None]] = None,
    ):
        self._feed = feed
        self._mirror = mirror
        self._handler = handler
        self._on_failure = on_failure
        self._tasks: Set[asyncio.Task] = set()
        self._running = False
        self.dispatched = 0
        self.failed = 0

    @property
    def running(self) -> bool:
        return self._running

    async def run(self) -> None:
        """Consume the feed until it reports a fatal error."""
        self._running = True
        try:
            while True:
                try:
                    event = await self._feed.next_event()
                except FeedError as e:
                    _log(f"[dispatcher] error receiving event: {e}")
                    if e.fatal:
                        break
                    continue
                self._mirror.apply(event)
                self._spawn(event)
        finally:
            self._running = False
        _log("[dispatcher] feed closed, dispatcher stopped")

    def _spawn(self, event: object) -> asyncio.Task:
        task = asyncio.create_task(self._handler(event))
        self.dispatched += 1
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._finished(event, t))
        return task

    def _finished(self, event: object, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        self.failed += 1
        _log(f"[dispatcher] handler for {type(event).__name__} failed: {exc!r}")
        if self._on_failure is not None:
            try:
                self._on_failure(event, exc)
            except Exception as hook_error:
                _log(f"[dispatcher] failure hook raised: {hook_error!r}")

    async def drain(self) -> None:
        """Wait for every in-flight handler to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def stats(self) -> dict:
        return {
            "dispatched": self.dispatched,
            "failed": self.failed,
            "in_flight": len(self._tasks),
        }
