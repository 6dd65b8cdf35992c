"""Relay engine — DM ↔ ticket channel message forwarding."""

import sys
from typing import Optional

from modmail.config import WorkspaceConfig
from modmail.domain.identity import is_ticket_channel, ticket_owner
from modmail.domain.messages import text
from modmail.domain.models import Envelope
from modmail.domain.provisioner import TicketRouter
from modmail.ports.inbound import IncomingMessage
from modmail.ports.outbound import DirectoryPort, MirrorPort


def _log(msg: str):
    print(msg, file=sys.stderr)


class RelayEngine:
    """Forwards user DMs into ticket channels and staff replies back to DMs."""

    def __init__(
        self,
        directory: DirectoryPort,
        mirror: MirrorPort,
        workspace: WorkspaceConfig,
        router: Optional[TicketRouter] = None,
    ):
        self._directory = directory
        self._mirror = mirror
        self._workspace = workspace
        self.router = router or TicketRouter(directory, mirror, workspace)

    async def handle_message(self, message: IncomingMessage) -> Optional[int]:
        """Relay ``message`` in whichever direction applies.

        Returns the destination channel id, or None when nothing was sent.
        """
        if message.is_bot:
            return None
        if message.is_private:
            return await self.relay_inbound(message)
        return await self.relay_outbound(message)

    def build_envelope(
        self,
        message: IncomingMessage,
        author_name: str,
        author_icon_url: Optional[str],
    ) -> Optional[Envelope]:
        description = message.content or ""
        image_url = None
        if message.attachments:
            image_url = message.attachments[0].url
            extra = message.attachments[1:]
            if extra:
                links = "\n".join(a.url for a in extra)
                label = text("more_attachments", default=self._workspace.locale)
                description = f"{description}\n\n{label}\n{links}".strip()
        if not description and not image_url:
            return None
        return Envelope(
            description=description,
            author_name=author_name,
            author_icon_url=author_icon_url,
            image_url=image_url,
            timestamp=message.timestamp,
        )

    async def relay_inbound(self, message: IncomingMessage) -> Optional[int]:
        """DM from a user → that user's ticket channel (created on first contact)."""
        envelope = self.build_envelope(
            message, message.author_name, message.author_avatar_url,
        )
        if envelope is None:
            _log(f"[relay] empty DM from {message.author_id}, nothing to relay")
            return None
        channel_id = await self.router.find_or_create(
            message.author_id, message.author_name,
        )
        try:
            await self._directory.send(channel_id, envelope)
        except Exception as e:
            if getattr(e, "status", None) == 404:
                _log(f"[relay] ticket channel {channel_id} for {message.author_id} is gone")
                self.router.forget(message.author_id, channel_id)
            raise
        return channel_id

    async def relay_outbound(self, message: IncomingMessage) -> Optional[int]:
        """Staff message in a ticket channel → DM to the ticket's user."""
        channel = self._mirror.channel(message.channel_id)
        if not is_ticket_channel(channel, self._workspace):
            return None
        user_id = ticket_owner(channel)
        if user_id is None:
            _log(f"[relay] ticket channel {channel.id} has no usable topic {channel.topic!r}, skipping")
            return None

        guild = self._mirror.guild(message.guild_id) if message.guild_id else None
        icon_url = guild.icon_url if guild else None
        envelope = self.build_envelope(message, self._workspace.staff_name, icon_url)
        if envelope is None:
            return None
        dm_channel_id = await self._directory.open_dm(user_id)
        await self._directory.send(dm_channel_id, envelope)
        return dm_channel_id
