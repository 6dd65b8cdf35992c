"""Launcher for the modmail bridge."""

import asyncio
import sys

from modmail.adapters.discord.client import ModmailClient
from modmail.config import AppConfig, ConfigError


def _log(msg: str):
    print(msg, file=sys.stderr)


async def launch(config: AppConfig) -> None:
    """Connect to Discord and run until the client closes."""
    client = ModmailClient(config)
    workspace = config.workspace
    _log(
        f"Launching modmail bridge (guild={workspace.guild_id}, "
        f"category={workspace.category_id}, locale={workspace.locale})"
    )
    async with client:
        await client.start(config.token)
    _log(f"Dispatcher stats: {client.dispatcher.stats()}")


def main() -> None:
    try:
        config = AppConfig.from_env()
    except ConfigError as e:
        _log(f"Configuration error: {e}")
        sys.exit(1)
    try:
        asyncio.run(launch(config))
    except KeyboardInterrupt:
        _log("Interrupted, shutting down")


if __name__ == "__main__":
    main()
