"""Configuration loaded once from the environment."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

SUPPORTED_LOCALES = ("ja", "en")

DEFAULT_STAFF_NAMES = {
    "ja": "運営(Moderator)",
    "en": "Staff",
}


class ConfigError(RuntimeError):
    """Raised when a required environment value is missing or malformed."""


def _require(env: dict, key: str) -> str:
    value = (env.get(key) or "").strip()
    if not value:
        raise ConfigError(f"Missing {key} env var")
    return value


def _require_id(env: dict, key: str) -> int:
    raw = _require(env, key)
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{key}={raw!r} is not a numeric id") from None
    if value <= 0:
        raise ConfigError(f"{key}={raw!r} is not a valid id")
    return value


def _resolve_locale(env: dict) -> str:
    locale = (env.get("MODMAIL_LOCALE") or "ja").strip().lower()
    if locale not in SUPPORTED_LOCALES:
        _stderr_print(f"Unsupported MODMAIL_LOCALE={locale!r}, falling back to 'ja'")
        locale = "ja"
    return locale


@dataclass(frozen=True)
class WorkspaceConfig:
    """The staff guild and the category that holds ticket channels."""

    guild_id: int
    category_id: int
    staff_name: str = DEFAULT_STAFF_NAMES["ja"]
    locale: str = "ja"


@dataclass(frozen=True)
class AppConfig:
    token: str
    workspace: WorkspaceConfig = field(default_factory=lambda: WorkspaceConfig(0, 0))

    @classmethod
    def from_env(cls, env=None) -> "AppConfig":
        """Build the config from environment variables, failing fast on bad input."""
        env = os.environ if env is None else env
        token = _require(env, "DISCORD_TOKEN")
        locale = _resolve_locale(env)
        staff_name = (env.get("MODMAIL_STAFF_NAME") or "").strip() or DEFAULT_STAFF_NAMES[locale]
        return cls(
            token=token,
            workspace=WorkspaceConfig(
                guild_id=_require_id(env, "GUILD_ID"),
                category_id=_require_id(env, "CATEGORY_ID"),
                staff_name=staff_name,
                locale=locale,
            ),
        )
