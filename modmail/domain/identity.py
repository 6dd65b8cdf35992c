"""Identity mapping between users and their ticket channels.

A ticket channel is any mirrored channel under the configured category whose
topic holds the owning user's id as decimal text.
"""

from typing import List, Optional

from modmail.config import WorkspaceConfig
from modmail.domain.models import ChannelInfo
from modmail.ports.outbound import MirrorPort


def topic_for(user_id: int) -> str:
    return str(user_id)


def is_ticket_channel(channel: Optional[ChannelInfo], workspace: WorkspaceConfig) -> bool:
    return channel is not None and channel.parent_id == workspace.category_id


def ticket_owner(channel: ChannelInfo) -> Optional[int]:
    """User id stored in the channel topic, or None if the topic was edited away."""
    topic = (channel.topic or "").strip()
    # ASCII digits only; int() would reject superscripts that isdigit() accepts.
    if not (topic.isascii() and topic.isdecimal()):
        return None
    return int(topic)


def find_ticket_channels(
    mirror: MirrorPort, workspace: WorkspaceConfig, user_id: int,
) -> List[int]:
    """All known ticket channels for ``user_id`` in mirror order."""
    return [
        ch.id
        for ch in mirror.channels()
        if ch.parent_id == workspace.category_id and ticket_owner(ch) == user_id
    ]


def find_ticket_channel(
    mirror: MirrorPort, workspace: WorkspaceConfig, user_id: int,
) -> Optional[int]:
    """The most recently observed ticket channel for ``user_id``, if any."""
    matches = find_ticket_channels(mirror, workspace, user_id)
    return matches[-1] if matches else None
