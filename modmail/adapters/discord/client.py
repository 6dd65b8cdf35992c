"""Discord client — turns gateway events into feed events and runs the dispatcher.

discord.py owns the gateway connection (reconnects, heartbeats). Every
listener here only publishes to the feed; all handling happens in the
dispatcher's tasks.
"""

import asyncio
import sys
import traceback
from typing import Optional

import discord

from modmail.adapters.discord.convert import (
    to_channel_info,
    to_guild_info,
    to_guild_snapshot,
    to_incoming,
    to_invocation,
)
from modmail.adapters.discord.directory import DiscordDirectory, DiscordResponder
from modmail.adapters.discord.feed import DiscordFeed
from modmail.config import AppConfig
from modmail.domain.commands import COMMANDS, CommandProcessor
from modmail.domain.dispatcher import EventDispatcher, EventHandler
from modmail.domain.mirror import Mirror
from modmail.domain.provisioner import TicketRouter
from modmail.domain.relay import RelayEngine
from modmail.ports.inbound import (
    ChannelRemoved,
    ChannelUpserted,
    GuildRemoved,
    GuildUpdated,
    InteractionCreated,
    MessageCreated,
    ReadyEvent,
)


def _log(msg: str):
    print(msg, file=sys.stderr)


class ModmailClient(discord.Client):
    """Gateway client for the modmail bridge."""

    def __init__(self, config: AppConfig, **discord_kwargs):
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents, **discord_kwargs)

        self.config = config
        workspace = config.workspace
        self.feed = DiscordFeed(latency=lambda: self.latency)
        self.mirror = Mirror()
        self.directory = DiscordDirectory(self)
        self.router = TicketRouter(self.directory, self.mirror, workspace)
        self.relay = RelayEngine(self.directory, self.mirror, workspace, router=self.router)
        self.commands = CommandProcessor(
            self.directory, self.mirror, workspace,
            latency=self.feed.latency, router=self.router,
        )
        self.dispatcher = EventDispatcher(
            self.feed, self.mirror, EventHandler(self.relay, self.commands),
        )
        self._dispatcher_task: Optional[asyncio.Task] = None

    async def setup_hook(self) -> None:
        names = await self.directory.register_commands(COMMANDS)
        _log(f"[modmail] registered global commands: {', '.join(names)}")
        self._dispatcher_task = asyncio.create_task(self._run_dispatcher())

    async def _run_dispatcher(self) -> None:
        await self.dispatcher.run()
        await self.dispatcher.drain()
        if not self.is_closed():
            await self.close()

    async def close(self) -> None:
        self.feed.close()
        await super().close()

    # -- Gateway listeners --

    async def on_ready(self):
        _log(f"[modmail] logged in as {self.user}")
        self.feed.publish(ReadyEvent(user_name=str(self.user)))

    async def on_guild_available(self, guild: discord.Guild):
        self.feed.publish(to_guild_snapshot(guild))

    async def on_guild_join(self, guild: discord.Guild):
        self.feed.publish(to_guild_snapshot(guild))

    async def on_guild_update(self, before: discord.Guild, after: discord.Guild):
        self.feed.publish(GuildUpdated(to_guild_info(after)))

    async def on_guild_remove(self, guild: discord.Guild):
        self.feed.publish(GuildRemoved(guild.id))

    async def on_guild_channel_create(self, channel: discord.abc.GuildChannel):
        self.feed.publish(ChannelUpserted(to_channel_info(channel)))

    async def on_guild_channel_update(self, before, after: discord.abc.GuildChannel):
        self.feed.publish(ChannelUpserted(to_channel_info(after)))

    async def on_guild_channel_delete(self, channel: discord.abc.GuildChannel):
        self.feed.publish(ChannelRemoved(channel.id))

    async def on_message(self, message: discord.Message):
        if self.user and message.author.id == self.user.id:
            return
        self.feed.publish(MessageCreated(to_incoming(message)))

    async def on_interaction(self, interaction: discord.Interaction):
        invocation = to_invocation(interaction)
        if invocation is None:
            return
        self.feed.publish(InteractionCreated(invocation, DiscordResponder(interaction)))

    async def on_error(self, event_method: str, *args, **kwargs):
        _log(f"[modmail] error in {event_method}:\n{traceback.format_exc()}")
        self.feed.fail(f"listener {event_method} raised", fatal=False)
