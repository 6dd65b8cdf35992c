"""Conversions between discord.py objects and domain records."""

from typing import Optional

import discord

from modmail.domain.models import ChannelInfo, Envelope, GuildInfo
from modmail.ports.inbound import (
    Attachment,
    CommandInvocation,
    GuildSnapshot,
    IncomingMessage,
)


def to_channel_info(channel: discord.abc.GuildChannel) -> ChannelInfo:
    return ChannelInfo(
        id=channel.id,
        guild_id=channel.guild.id if channel.guild else None,
        parent_id=channel.category_id,
        topic=getattr(channel, "topic", None),
        name=channel.name,
    )


def to_guild_info(guild: discord.Guild) -> GuildInfo:
    return GuildInfo(
        id=guild.id,
        name=guild.name,
        icon_url=guild.icon.url if guild.icon else None,
    )


def to_guild_snapshot(guild: discord.Guild) -> GuildSnapshot:
    return GuildSnapshot(
        guild=to_guild_info(guild),
        channels=tuple(to_channel_info(ch) for ch in guild.channels),
    )


def to_incoming(message: discord.Message) -> IncomingMessage:
    author = message.author
    return IncomingMessage(
        message_id=message.id,
        channel_id=message.channel.id,
        guild_id=message.guild.id if message.guild else None,
        author_id=author.id,
        author_name=author.display_name,
        author_avatar_url=author.display_avatar.url,
        content=message.content,
        is_bot=author.bot,
        timestamp=message.created_at,
        attachments=[
            Attachment(url=a.url, filename=a.filename, content_type=a.content_type)
            for a in message.attachments
        ],
    )


def _user_options(data: dict) -> dict:
    options = {}
    for option in data.get("options") or []:
        if option.get("type") == discord.AppCommandOptionType.user.value:
            options[option["name"]] = int(option["value"])
    return options


def to_invocation(interaction: discord.Interaction) -> Optional[CommandInvocation]:
    """Build a CommandInvocation from a slash-command interaction."""
    if interaction.type != discord.InteractionType.application_command:
        return None
    data = interaction.data or {}
    channel = interaction.channel
    snapshot = None
    if isinstance(channel, discord.abc.GuildChannel):
        snapshot = to_channel_info(channel)
    return CommandInvocation(
        name=data.get("name", ""),
        interaction_id=interaction.id,
        channel_id=interaction.channel_id,
        guild_id=interaction.guild_id,
        invoker_id=interaction.user.id,
        permissions=frozenset(name for name, value in interaction.permissions if value),
        options=_user_options(data),
        locale=str(interaction.locale) if interaction.locale else None,
        channel=snapshot,
    )


def to_embed(envelope: Envelope) -> discord.Embed:
    embed = discord.Embed(
        title=envelope.title,
        description=envelope.description or None,
        color=envelope.color,
        timestamp=envelope.timestamp,
    )
    if envelope.author_name:
        embed.set_author(name=envelope.author_name, icon_url=envelope.author_icon_url)
    if envelope.image_url:
        embed.set_image(url=envelope.image_url)
    return embed
