"""Tests for DiscordDirectory / DiscordResponder against a mocked discord.Client."""

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from modmail.adapters.discord.directory import DiscordDirectory, DiscordResponder
from modmail.domain.commands import COMMANDS
from modmail.domain.models import Envelope
from modmail.ports.outbound import DirectoryPort, InteractionResponder


def _client():
    client = MagicMock()
    client.application_id = 555
    client.fetch_guild = AsyncMock()
    client.fetch_channel = AsyncMock()
    client.create_dm = AsyncMock()
    client.http.bulk_upsert_global_commands = AsyncMock(
        side_effect=lambda app_id, payload: [dict(c, id=str(i)) for i, c in enumerate(payload)],
    )
    return client


def _guild():
    guild = MagicMock()
    guild.id = 1000
    guild.create_text_channel = AsyncMock()
    guild.kick = AsyncMock()
    guild.ban = AsyncMock()
    return guild


class TestDiscordDirectory:
    def test_is_directory_port(self):
        assert isinstance(DiscordDirectory(_client()), DirectoryPort)

    @pytest.mark.asyncio
    async def test_create_channel(self):
        client = _client()
        guild = _guild()
        category = MagicMock()
        client.get_guild.return_value = guild
        client.get_channel.return_value = category
        created = MagicMock()
        created.id = 6000
        created.guild.id = 1000
        created.category_id = 2000
        created.topic = "424242"
        created.name = "alice"
        guild.create_text_channel.return_value = created

        info = await DiscordDirectory(client).create_channel(1000, "alice", 2000, "424242")

        guild.create_text_channel.assert_awaited_once_with("alice", category=category, topic="424242")
        assert info.id == 6000
        assert info.parent_id == 2000

    @pytest.mark.asyncio
    async def test_create_channel_fetches_uncached(self):
        client = _client()
        guild = _guild()
        client.get_guild.return_value = None
        client.get_channel.return_value = None
        client.fetch_guild.return_value = guild
        guild.create_text_channel.return_value = MagicMock(id=1, category_id=2000, topic="1")

        await DiscordDirectory(client).create_channel(1000, "alice", 2000, "1")
        client.fetch_guild.assert_awaited_once_with(1000)
        client.fetch_channel.assert_awaited_once_with(2000)

    @pytest.mark.asyncio
    async def test_send_embed(self):
        client = _client()
        messageable = MagicMock()
        messageable.send = AsyncMock()
        client.get_partial_messageable.return_value = messageable

        await DiscordDirectory(client).send(50, Envelope(description="hi", author_name="Alice"))

        client.get_partial_messageable.assert_called_once_with(50)
        embed = messageable.send.call_args.kwargs["embed"]
        assert isinstance(embed, discord.Embed)
        assert embed.description == "hi"

    @pytest.mark.asyncio
    async def test_open_dm(self):
        client = _client()
        client.create_dm.return_value = MagicMock(id=777)
        assert await DiscordDirectory(client).open_dm(424242) == 777
        (user,) = client.create_dm.call_args.args
        assert user.id == 424242

    @pytest.mark.asyncio
    async def test_delete_channel(self):
        client = _client()
        channel = MagicMock()
        channel.delete = AsyncMock()
        client.get_channel.return_value = channel
        await DiscordDirectory(client).delete_channel(50)
        channel.delete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_kick_and_ban(self):
        client = _client()
        guild = _guild()
        client.get_guild.return_value = guild
        directory = DiscordDirectory(client)

        await directory.remove_member(1000, 31337)
        await directory.ban_member(1000, 31337)

        assert guild.kick.call_args.args[0].id == 31337
        assert guild.ban.call_args.args[0].id == 31337
        assert guild.ban.call_args.kwargs["delete_message_seconds"] == 0

    @pytest.mark.asyncio
    async def test_remote_error_propagates(self):
        client = _client()
        guild = _guild()
        response = MagicMock(status=403, reason="Forbidden")
        guild.kick.side_effect = discord.Forbidden(response, "Missing Permissions")
        client.get_guild.return_value = guild
        with pytest.raises(discord.Forbidden):
            await DiscordDirectory(client).remove_member(1000, 31337)

    @pytest.mark.asyncio
    async def test_register_commands(self):
        client = _client()
        names = await DiscordDirectory(client).register_commands(COMMANDS)
        assert names == ["ping", "close", "kick", "ban"]
        app_id, payload = client.http.bulk_upsert_global_commands.call_args.args
        assert app_id == 555
        assert payload == COMMANDS


class TestDiscordResponder:
    def _interaction(self):
        interaction = MagicMock()
        interaction.response.defer = AsyncMock()
        interaction.response.send_message = AsyncMock()
        interaction.followup.send = AsyncMock()
        return interaction

    def test_is_responder(self):
        assert isinstance(DiscordResponder(self._interaction()), InteractionResponder)

    @pytest.mark.asyncio
    async def test_calls(self):
        interaction = self._interaction()
        responder = DiscordResponder(interaction)
        await responder.defer()
        await responder.followup("Pong!\n1")
        await responder.respond("done")
        interaction.response.defer.assert_awaited_once()
        interaction.followup.send.assert_awaited_once_with("Pong!\n1")
        interaction.response.send_message.assert_awaited_once_with("done")
