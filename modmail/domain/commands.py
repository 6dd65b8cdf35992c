"""Command processor — staff slash commands.

Each invocation runs once and ends after its last reply:

- ``ping``  → defer, then follow up with the feed latency in microseconds
- ``close`` → only inside a ticket channel: DM a closing notice to the owner,
  confirm to the invoker, then delete the channel
- ``kick`` / ``ban`` → only with the matching permission: defer, act on the
  target in the staff guild, then follow up
"""

import math
import sys
from typing import Awaitable, Callable, Dict, List, Optional

from modmail.config import WorkspaceConfig
from modmail.domain.identity import is_ticket_channel, ticket_owner
from modmail.domain.messages import text
from modmail.domain.models import Envelope
from modmail.domain.provisioner import TicketRouter
from modmail.ports.inbound import CommandInvocation
from modmail.ports.outbound import DirectoryPort, InteractionResponder, MirrorPort

CLOSE_NOTICE_COLOR = 0xF50505

# Discord application command payload constants
CHAT_INPUT = 1
OPTION_USER = 6

COMMANDS: List[dict] = [
    {"name": "ping", "description": "bot ping", "type": CHAT_INPUT},
    {"name": "close", "description": "close some ticket", "type": CHAT_INPUT},
    {
        "name": "kick",
        "description": "Kick some user",
        "type": CHAT_INPUT,
        "options": [
            {"type": OPTION_USER, "name": "user", "description": "user to kick", "required": True},
        ],
    },
    {
        "name": "ban",
        "description": "Ban some user",
        "type": CHAT_INPUT,
        "options": [
            {"type": OPTION_USER, "name": "user", "description": "user to ban", "required": True},
        ],
    },
]


def _log(msg: str):
    print(msg, file=sys.stderr)


def latency_micros(seconds: float) -> int:
    """Latency in whole microseconds; 0 until the feed has measured one."""
    if seconds is None or not math.isfinite(seconds):
        return 0
    return int(round(seconds * 1_000_000))


class CommandProcessor:
    def __init__(
        self,
        directory: DirectoryPort,
        mirror: MirrorPort,
        workspace: WorkspaceConfig,
        latency: Callable[[], float],
        router: Optional[TicketRouter] = None,
    ):
        self._directory = directory
        self._mirror = mirror
        self._workspace = workspace
        self._latency = latency
        self._router = router
        self._handlers: Dict[str, Callable[..., Awaitable[str]]] = {
            "ping": self._ping,
            "close": self._close,
            "kick": self._kick,
            "ban": self._ban,
        }

    def _text(self, key: str, invocation: CommandInvocation, **kwargs) -> str:
        return text(key, invocation.locale, default=self._workspace.locale, **kwargs)

    async def handle(
        self, invocation: CommandInvocation, responder: InteractionResponder,
    ) -> str:
        """Run one invocation. Returns the outcome name (for logs and tests)."""
        handler = self._handlers.get(invocation.name)
        if handler is None:
            _log(f"[commands] unknown command {invocation.name!r}, ignoring")
            return "ignored"
        outcome = await handler(invocation, responder)
        _log(f"[commands] /{invocation.name} by {invocation.invoker_id}: {outcome}")
        return outcome

    async def _ping(self, invocation: CommandInvocation, responder: InteractionResponder) -> str:
        await responder.defer()
        micros = latency_micros(self._latency())
        await responder.followup(self._text("pong", invocation, latency=micros))
        return "pong"

    async def _close(self, invocation: CommandInvocation, responder: InteractionResponder) -> str:
        channel = invocation.channel
        if channel is None and invocation.channel_id is not None:
            channel = self._mirror.channel(invocation.channel_id)
        if not is_ticket_channel(channel, self._workspace):
            await responder.respond(self._text("close_outside_ticket", invocation))
            return "rejected"
        user_id = ticket_owner(channel)
        if user_id is None:
            await responder.respond(self._text("close_owner_unknown", invocation))
            return "rejected"

        dm_channel_id = await self._directory.open_dm(user_id)
        notice = Envelope(
            title=text("close_notice_title", default=self._workspace.locale),
            description=text("close_notice_body", default=self._workspace.locale),
            color=CLOSE_NOTICE_COLOR,
        )
        await self._directory.send(dm_channel_id, notice)
        await responder.respond(self._text("close_done", invocation))
        await self._directory.delete_channel(channel.id)
        if self._router is not None:
            self._router.forget(user_id)
        return "closed"

    async def _kick(self, invocation: CommandInvocation, responder: InteractionResponder) -> str:
        return await self._moderate(
            invocation, responder, "kick_members", self._directory.remove_member, "kick_done",
        )

    async def _ban(self, invocation: CommandInvocation, responder: InteractionResponder) -> str:
        return await self._moderate(
            invocation, responder, "ban_members", self._directory.ban_member, "ban_done",
        )

    async def _moderate(
        self,
        invocation: CommandInvocation,
        responder: InteractionResponder,
        permission: str,
        action: Callable[[int, int], Awaitable[None]],
        done_key: str,
    ) -> str:
        if permission not in invocation.permissions:
            await responder.respond(self._text("staff_only", invocation))
            return "rejected"
        target = invocation.options.get("user")
        if target is None:
            _log(f"[commands] /{invocation.name} without a user option, rejecting")
            await responder.respond(self._text("missing_target", invocation))
            return "rejected"

        await responder.defer()
        try:
            await action(self._workspace.guild_id, target)
        except Exception as e:
            try:
                await responder.followup(self._text("action_failed", invocation, error=e))
            except Exception as followup_error:
                _log(f"[commands] failure follow-up for /{invocation.name} failed: {followup_error}")
            raise
        await responder.followup(self._text(done_key, invocation, user_id=target))
        return invocation.name
