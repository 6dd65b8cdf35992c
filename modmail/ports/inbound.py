"""Inbound port — platform-agnostic events delivered by the realtime feed."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, FrozenSet, List, Optional, Tuple

from modmail.domain.models import ChannelInfo, GuildInfo


@dataclass(frozen=True)
class Attachment:
    url: str
    filename: str = ""
    content_type: Optional[str] = None


@dataclass
class IncomingMessage:
    """A message seen by the bot, either in a DM or in a guild channel."""

    message_id: int
    channel_id: int
    guild_id: Optional[int]
    author_id: int
    author_name: str
    author_avatar_url: Optional[str]
    content: str
    is_bot: bool
    timestamp: Optional[datetime] = None
    attachments: List[Attachment] = field(default_factory=list)

    @property
    def is_private(self) -> bool:
        return self.guild_id is None


@dataclass
class CommandInvocation:
    """A slash command invocation."""

    name: str
    interaction_id: int
    channel_id: Optional[int]
    guild_id: Optional[int]
    invoker_id: int
    permissions: FrozenSet[str] = frozenset()
    options: Dict[str, int] = field(default_factory=dict)
    locale: Optional[str] = None
    # Channel snapshot sent with the interaction; the mirror is used when absent.
    channel: Optional[ChannelInfo] = None


# -- Feed events --


@dataclass(frozen=True)
class ReadyEvent:
    user_name: str = ""


@dataclass(frozen=True)
class GuildSnapshot:
    """Full state of a guild, replacing whatever the mirror held for it."""

    guild: GuildInfo
    channels: Tuple[ChannelInfo, ...] = ()


@dataclass(frozen=True)
class GuildUpdated:
    guild: GuildInfo


@dataclass(frozen=True)
class GuildRemoved:
    guild_id: int


@dataclass(frozen=True)
class ChannelUpserted:
    channel: ChannelInfo


@dataclass(frozen=True)
class ChannelRemoved:
    channel_id: int


@dataclass(frozen=True)
class MessageCreated:
    message: IncomingMessage


@dataclass(frozen=True)
class InteractionCreated:
    invocation: CommandInvocation
    # InteractionResponder bound to this interaction's token
    responder: object = None
