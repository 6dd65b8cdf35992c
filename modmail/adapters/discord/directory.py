"""DirectoryPort and InteractionResponder implementations over discord.py."""

from typing import List, Sequence

import discord

from modmail.adapters.discord.convert import to_channel_info, to_embed
from modmail.domain.models import ChannelInfo, Envelope


class DiscordDirectory:
    """Remote directory calls. Errors are discord.HTTPException subclasses."""

    def __init__(self, client: discord.Client):
        self._client = client

    async def _guild(self, guild_id: int) -> discord.Guild:
        return self._client.get_guild(guild_id) or await self._client.fetch_guild(guild_id)

    async def _channel(self, channel_id: int):
        return self._client.get_channel(channel_id) or await self._client.fetch_channel(channel_id)

    async def create_channel(
        self, guild_id: int, name: str, parent_id: int, topic: str,
    ) -> ChannelInfo:
        guild = await self._guild(guild_id)
        category = await self._channel(parent_id)
        channel = await guild.create_text_channel(name, category=category, topic=topic)
        return to_channel_info(channel)

    async def send(self, channel_id: int, envelope: Envelope) -> None:
        messageable = self._client.get_partial_messageable(channel_id)
        await messageable.send(embed=to_embed(envelope))

    async def open_dm(self, user_id: int) -> int:
        dm = await self._client.create_dm(discord.Object(id=user_id))
        return dm.id

    async def delete_channel(self, channel_id: int) -> None:
        channel = await self._channel(channel_id)
        await channel.delete(reason="Ticket closed")

    async def remove_member(self, guild_id: int, user_id: int) -> None:
        guild = await self._guild(guild_id)
        await guild.kick(discord.Object(id=user_id))

    async def ban_member(self, guild_id: int, user_id: int) -> None:
        guild = await self._guild(guild_id)
        await guild.ban(discord.Object(id=user_id), delete_message_seconds=0)

    async def register_commands(self, commands: Sequence[dict]) -> List[str]:
        """Replace the global command set with ``commands``."""
        registered = await self._client.http.bulk_upsert_global_commands(
            self._client.application_id, list(commands),
        )
        return [c["name"] for c in registered]


class DiscordResponder:
    """Replies to a single interaction token."""

    def __init__(self, interaction: discord.Interaction):
        self._interaction = interaction

    async def defer(self) -> None:
        await self._interaction.response.defer()

    async def respond(self, content: str) -> None:
        await self._interaction.response.send_message(content)

    async def followup(self, content: str) -> None:
        await self._interaction.followup.send(content)
