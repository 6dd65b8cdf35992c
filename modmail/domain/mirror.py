"""Local read-through mirror of guild and channel state.

Written only by the event dispatcher (``apply``); handlers read it.
Iteration order over channels is the order in which they were first observed.
"""

from typing import Callable, Dict, Iterator, List, Optional

from modmail.domain.models import ChannelInfo, GuildInfo
from modmail.ports.inbound import (
    ChannelRemoved,
    ChannelUpserted,
    GuildRemoved,
    GuildSnapshot,
    GuildUpdated,
)


class Mirror:
    """In-memory channel/guild table kept current by replaying feed events."""

    def __init__(self):
        self._channels: Dict[int, ChannelInfo] = {}
        self._guilds: Dict[int, GuildInfo] = {}
        self._listeners: List[Callable[[object], None]] = []

    def subscribe(self, listener: Callable[[object], None]) -> None:
        """Call ``listener(event)`` after every applied event."""
        self._listeners.append(listener)

    def apply(self, event: object) -> None:
        """Fold one feed event into the mirror. Unrelated events are ignored."""
        if isinstance(event, ChannelUpserted):
            # Updating an existing key keeps its original position.
            self._channels[event.channel.id] = event.channel
        elif isinstance(event, ChannelRemoved):
            self._channels.pop(event.channel_id, None)
        elif isinstance(event, GuildSnapshot):
            self._drop_guild_channels(event.guild.id)
            self._guilds[event.guild.id] = event.guild
            for channel in event.channels:
                self._channels[channel.id] = channel
        elif isinstance(event, GuildUpdated):
            self._guilds[event.guild.id] = event.guild
        elif isinstance(event, GuildRemoved):
            self._guilds.pop(event.guild_id, None)
            self._drop_guild_channels(event.guild_id)
        for listener in self._listeners:
            listener(event)

    def _drop_guild_channels(self, guild_id: int) -> None:
        stale = [cid for cid, ch in self._channels.items() if ch.guild_id == guild_id]
        for cid in stale:
            del self._channels[cid]

    def channels(self) -> Iterator[ChannelInfo]:
        # Snapshot so readers never see the dict change mid-iteration.
        return iter(list(self._channels.values()))

    def channel(self, channel_id: int) -> Optional[ChannelInfo]:
        return self._channels.get(channel_id)

    def guild(self, guild_id: int) -> Optional[GuildInfo]:
        return self._guilds.get(guild_id)

    def __len__(self) -> int:
        return len(self._channels)
