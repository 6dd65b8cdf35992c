"""Shared mock ports for domain tests — no discord import needed."""

import asyncio
from datetime import datetime, timezone

import pytest

from modmail.config import WorkspaceConfig
from modmail.domain.mirror import Mirror
from modmail.domain.models import ChannelInfo, GuildInfo
from modmail.ports.inbound import (
    Attachment,
    ChannelUpserted,
    CommandInvocation,
    GuildSnapshot,
    IncomingMessage,
)

GUILD_ID = 1000
CATEGORY_ID = 2000
OTHER_CATEGORY_ID = 2999
USER_ID = 424242
STAFF_ID = 7
NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class MockDirectory:
    """Mock DirectoryPort recording every remote call in order."""

    def __init__(self, create_delay: float = 0.0):
        self.calls = []
        self.sent = []
        self.created = []
        self.create_delay = create_delay
        self.fail_on = {}
        self._next_id = 5000

    def _maybe_fail(self, op):
        exc = self.fail_on.get(op)
        if exc is not None:
            raise exc

    async def create_channel(self, guild_id, name, parent_id, topic):
        self.calls.append(("create_channel", guild_id, name, parent_id, topic))
        if self.create_delay:
            await asyncio.sleep(self.create_delay)
        self._maybe_fail("create_channel")
        self._next_id += 1
        channel = ChannelInfo(
            id=self._next_id, guild_id=guild_id, parent_id=parent_id, topic=topic, name=name,
        )
        self.created.append(channel)
        return channel

    async def send(self, channel_id, envelope):
        self.calls.append(("send", channel_id))
        self._maybe_fail("send")
        self.sent.append((channel_id, envelope))

    async def open_dm(self, user_id):
        self.calls.append(("open_dm", user_id))
        self._maybe_fail("open_dm")
        return 900000 + user_id

    async def delete_channel(self, channel_id):
        self.calls.append(("delete_channel", channel_id))
        self._maybe_fail("delete_channel")

    async def remove_member(self, guild_id, user_id):
        self.calls.append(("remove_member", guild_id, user_id))
        self._maybe_fail("remove_member")

    async def ban_member(self, guild_id, user_id):
        self.calls.append(("ban_member", guild_id, user_id))
        self._maybe_fail("ban_member")

    async def register_commands(self, commands):
        self.calls.append(("register_commands", len(commands)))
        return [c["name"] for c in commands]

    def ops(self):
        return [c[0] for c in self.calls]


class MockResponder:
    """Mock InteractionResponder sharing a call log with the directory."""

    def __init__(self, log=None):
        self.log = log if log is not None else []
        self.responses = []
        self.followups = []
        self.deferred = False

    async def defer(self):
        self.deferred = True
        self.log.append(("defer",))

    async def respond(self, content):
        self.responses.append(content)
        self.log.append(("respond", content))

    async def followup(self, content):
        self.followups.append(content)
        self.log.append(("followup", content))


def ticket_channel(channel_id, user_id=USER_ID, parent_id=CATEGORY_ID, topic=None):
    return ChannelInfo(
        id=channel_id,
        guild_id=GUILD_ID,
        parent_id=parent_id,
        topic=str(user_id) if topic is None else topic,
        name=f"ticket-{channel_id}",
    )


def make_message(
    content="hello",
    *,
    guild_id=None,
    channel_id=300,
    author_id=USER_ID,
    author_name="Alice",
    is_bot=False,
    attachments=None,
):
    return IncomingMessage(
        message_id=1,
        channel_id=channel_id,
        guild_id=guild_id,
        author_id=author_id,
        author_name=author_name,
        author_avatar_url=f"https://cdn.example/avatars/{author_id}.png",
        content=content,
        is_bot=is_bot,
        timestamp=NOW,
        attachments=[Attachment(url=u) for u in (attachments or [])],
    )


def make_invocation(name, *, channel=None, channel_id=None, permissions=(), options=None, locale="ja"):
    return CommandInvocation(
        name=name,
        interaction_id=1,
        channel_id=channel_id if channel_id is not None else (channel.id if channel else None),
        guild_id=GUILD_ID,
        invoker_id=STAFF_ID,
        permissions=frozenset(permissions),
        options=options or {},
        locale=locale,
        channel=channel,
    )


@pytest.fixture
def workspace():
    return WorkspaceConfig(guild_id=GUILD_ID, category_id=CATEGORY_ID, staff_name="Staff", locale="ja")


@pytest.fixture
def mirror():
    m = Mirror()
    m.apply(GuildSnapshot(
        guild=GuildInfo(id=GUILD_ID, name="Staff HQ", icon_url="https://cdn.example/icons/1000.png"),
        channels=(
            ChannelInfo(id=CATEGORY_ID, guild_id=GUILD_ID, parent_id=None, topic=None, name="tickets"),
            ChannelInfo(id=10, guild_id=GUILD_ID, parent_id=None, topic=None, name="general"),
        ),
    ))
    return m


@pytest.fixture
def directory():
    return MockDirectory()


def add_channel(mirror, channel):
    mirror.apply(ChannelUpserted(channel))
    return channel
