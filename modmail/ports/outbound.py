"""Outbound ports — interfaces for the platform collaborators."""

from typing import Callable, Iterable, List, Optional, Protocol, Sequence, runtime_checkable

from modmail.domain.models import ChannelInfo, Envelope, GuildInfo


class FeedError(Exception):
    """Error reported by the realtime feed; fatal ones stop the dispatcher."""

    def __init__(self, message: str, fatal: bool = False):
        super().__init__(message)
        self.fatal = fatal


@runtime_checkable
class EventFeed(Protocol):
    """Realtime event stream."""

    async def next_event(self) -> object: ...

    def latency(self) -> float: ...


@runtime_checkable
class MirrorPort(Protocol):
    """Read access to the local mirror of platform state."""

    def channels(self) -> Iterable[ChannelInfo]: ...
    def channel(self, channel_id: int) -> Optional[ChannelInfo]: ...
    def guild(self, guild_id: int) -> Optional[GuildInfo]: ...
    def subscribe(self, listener: Callable[[object], None]) -> None: ...


@runtime_checkable
class DirectoryPort(Protocol):
    """Remote directory API."""

    async def create_channel(
        self, guild_id: int, name: str, parent_id: int, topic: str,
    ) -> ChannelInfo: ...

    async def send(self, channel_id: int, envelope: Envelope) -> None: ...
    async def open_dm(self, user_id: int) -> int: ...
    async def delete_channel(self, channel_id: int) -> None: ...
    async def remove_member(self, guild_id: int, user_id: int) -> None: ...
    async def ban_member(self, guild_id: int, user_id: int) -> None: ...
    async def register_commands(self, commands: Sequence[dict]) -> List[str]: ...


@runtime_checkable
class InteractionResponder(Protocol):
    """Reply channel bound to one interaction token."""

    async def defer(self) -> None: ...
    async def respond(self, content: str) -> None: ...
    async def followup(self, content: str) -> None: ...
