"""Ticket channel provisioning.

``provision_ticket_channel`` creates a channel unconditionally; callers must
check the identity mapper first. ``TicketRouter`` does that check and the
creation under a per-user lock so concurrent first messages from one user
cannot both create a channel.
"""

import asyncio
import re
import sys
from typing import Dict, Optional

from modmail.config import WorkspaceConfig
from modmail.domain.identity import find_ticket_channels, topic_for
from modmail.ports.inbound import ChannelRemoved, ChannelUpserted, GuildRemoved, GuildSnapshot
from modmail.ports.outbound import DirectoryPort, MirrorPort

_MAX_CHANNEL_NAME = 100


def _log(msg: str):
    print(msg, file=sys.stderr)


def channel_name_for(display_name: str) -> str:
    """Turn a display name into a channel name Discord will accept."""
    name = (display_name or "").strip().lower()
    name = re.sub(r"[\s#]+", "-", name)
    name = re.sub(r"-+", "-", name).strip("-")
    if not name:
        name = "ticket"
    return name[:_MAX_CHANNEL_NAME]


async def provision_ticket_channel(
    directory: DirectoryPort,
    workspace: WorkspaceConfig,
    user_id: int,
    display_name: str,
) -> int:
    """Create a ticket channel for ``user_id`` and return its id."""
    channel = await directory.create_channel(
        workspace.guild_id,
        channel_name_for(display_name),
        workspace.category_id,
        topic_for(user_id),
    )
    _log(f"[provisioner] created ticket channel {channel.id} for user {user_id}")
    return channel.id


class TicketRouter:
    """Atomic find-or-create of a user's ticket channel."""

    def __init__(
        self,
        directory: DirectoryPort,
        mirror: MirrorPort,
        workspace: WorkspaceConfig,
    ):
        self._directory = directory
        self._mirror = mirror
        self._workspace = workspace
        self._locks: Dict[int, asyncio.Lock] = {}
        self._waiting: Dict[int, int] = {}
        # user_id → channel created here that the mirror has not observed yet
        self._provisioned: Dict[int, int] = {}
        mirror.subscribe(self.observe)

    def observe(self, event: object) -> None:
        """Drop provisioning records the mirror has caught up with.

        Once the mirror has seen a created channel (or its removal, or a full
        guild snapshot) the identity mapper is authoritative for it, whether
        the channel is still a ticket, was moved out of the category, or was
        deleted by hand.
        """
        if not self._provisioned:
            return
        if isinstance(event, ChannelUpserted):
            self._discard_channel(event.channel.id)
        elif isinstance(event, ChannelRemoved):
            self._discard_channel(event.channel_id)
        elif isinstance(event, GuildSnapshot) and event.guild.id == self._workspace.guild_id:
            self._provisioned.clear()
        elif isinstance(event, GuildRemoved) and event.guild_id == self._workspace.guild_id:
            self._provisioned.clear()

    def _discard_channel(self, channel_id: int) -> None:
        for user_id, provisioned in list(self._provisioned.items()):
            if provisioned == channel_id:
                del self._provisioned[user_id]

    def lookup(self, user_id: int) -> Optional[int]:
        """Existing ticket channel for ``user_id`` without creating one."""
        matches = find_ticket_channels(self._mirror, self._workspace, user_id)
        if matches:
            self._provisioned.pop(user_id, None)
            if len(matches) > 1:
                _log(
                    f"[router] duplicate ticket channels for user {user_id}: "
                    f"{matches}; routing to {matches[-1]}"
                )
            return matches[-1]
        return self._provisioned.get(user_id)

    async def find_or_create(self, user_id: int, display_name: str) -> int:
        lock = self._locks.setdefault(user_id, asyncio.Lock())
        self._waiting[user_id] = self._waiting.get(user_id, 0) + 1
        try:
            async with lock:
                existing = self.lookup(user_id)
                if existing is not None:
                    return existing
                channel_id = await provision_ticket_channel(
                    self._directory, self._workspace, user_id, display_name,
                )
                if self._mirror.channel(channel_id) is None:
                    self._provisioned[user_id] = channel_id
                return channel_id
        finally:
            self._waiting[user_id] -= 1
            if not self._waiting[user_id]:
                del self._waiting[user_id]
                self._locks.pop(user_id, None)

    def forget(self, user_id: int, channel_id: Optional[int] = None) -> None:
        """Drop the provisioning record for ``user_id``.

        With ``channel_id`` the record is only dropped if it still points there.
        """
        if channel_id is None or self._provisioned.get(user_id) == channel_id:
            self._provisioned.pop(user_id, None)

    @property
    def pending_count(self) -> int:
        return len(self._provisioned)
