"""discord.py implementations of the modmail ports."""

from modmail.adapters.discord.client import ModmailClient
from modmail.adapters.discord.directory import DiscordDirectory, DiscordResponder
from modmail.adapters.discord.feed import DiscordFeed

__all__ = [
    "ModmailClient",
    "DiscordDirectory",
    "DiscordResponder",
    "DiscordFeed",
]
