"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ChannelInfo:
    """What the mirror knows about a guild channel."""

    id: int
    guild_id: Optional[int]
    parent_id: Optional[int]
    topic: Optional[str]
    name: str = ""


@dataclass(frozen=True)
class GuildInfo:
    id: int
    name: str = ""
    icon_url: Optional[str] = None


@dataclass
class Envelope:
    """A relayed message rendered as an embed."""

    description: str = ""
    author_name: Optional[str] = None
    author_icon_url: Optional[str] = None
    image_url: Optional[str] = None
    timestamp: Optional[datetime] = None
    title: Optional[str] = None
    color: Optional[int] = None
