"""Port interfaces (Hexagonal Architecture)."""

from modmail.ports.inbound import (
    Attachment,
    ChannelRemoved,
    ChannelUpserted,
    CommandInvocation,
    GuildRemoved,
    GuildSnapshot,
    GuildUpdated,
    IncomingMessage,
    InteractionCreated,
    MessageCreated,
    ReadyEvent,
)
from modmail.ports.outbound import (
    DirectoryPort,
    EventFeed,
    FeedError,
    InteractionResponder,
    MirrorPort,
)

__all__ = [
    "Attachment",
    "ChannelRemoved",
    "ChannelUpserted",
    "CommandInvocation",
    "GuildRemoved",
    "GuildSnapshot",
    "GuildUpdated",
    "IncomingMessage",
    "InteractionCreated",
    "MessageCreated",
    "ReadyEvent",
    "DirectoryPort",
    "EventFeed",
    "FeedError",
    "InteractionResponder",
    "MirrorPort",
]
