"""
Configuration Management
========================

Every setting the bot needs lives here, read from the environment (and a
.env file) exactly once at startup. The resulting Config object is then
passed explicitly to each component; nothing else in the package calls
os.getenv().

Sections:
1. slack     - tokens, transport mode and the broadcast channel
2. foodtruck - the Seattle Food Truck API endpoint and timeout
3. broadcast - the weekday schedule and the configured location ids
4. server    - bind address for the HTTP webhook

Usage:
    from seafoodtruck_bot.utils.config import load_config

    config = load_config()
    print(config.slack.bot_token)
    print(config.broadcast.location_ids)
"""

import os
from dataclasses import dataclass, field
from typing import Mapping

from dotenv import load_dotenv

from seafoodtruck_bot.errors import ConfigError


DEFAULT_API_URL = "https://www.seattlefoodtruck.com/api"
DEFAULT_BROADCAST_CRON = "0 8 * * mon-fri"
SLACK_MODES = ("http", "socket")


def _required(env: Mapping[str, str], *names: str) -> str:
    """
    Get a required environment variable, trying each name in turn.

    Args:
        env: The environment mapping to read from
        names: Accepted variable names, preferred name first

    Returns:
        The first non-empty value found

    Raises:
        ConfigError: If none of the names is set
    """
    for name in names:
        value = env.get(name)
        if value:
            return value
    raise ConfigError(
        f"Missing required environment variable: {names[0]}\n"
        f"Please ensure {names[0]} is set in your .env file."
    )


def _optional(env: Mapping[str, str], name: str, default: str | None) -> str | None:
    """Get an optional environment variable, treating empty as unset."""
    value = env.get(name)
    return value if value else default


def _optional_int(env: Mapping[str, str], name: str, default: int) -> int:
    """
    Get an optional integer environment variable.

    Invalid values fall back to the default; startup should not fail
    because of a typo in a tuning knob.
    """
    value = env.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        # Logging is not configured yet at this point
        print(f"Warning: {name} is not a valid integer, using default: {default}")
        return default


def _split_ids(raw: str | None) -> tuple[str, ...]:
    """Split a comma separated id list, dropping blanks."""
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


# ==============================================================================
# Configuration Dataclasses
# ==============================================================================

@dataclass(frozen=True)
class SlackConfig:
    """Slack API configuration."""
    bot_token: str               # xoxb-... token used for chat.postMessage
    mode: str = "http"           # "http" (Events API webhook) or "socket"
    app_token: str | None = None # xapp-... token, Socket Mode only
    signing_secret: str | None = None
    channel: str | None = None   # Target of the scheduled broadcast


@dataclass(frozen=True)
class FoodTruckConfig:
    """Seattle Food Truck API configuration."""
    base_url: str = DEFAULT_API_URL
    timeout_seconds: int = 10


@dataclass(frozen=True)
class BroadcastConfig:
    """Scheduled "find events" broadcast configuration."""
    location_ids: tuple[str, ...] = ()
    cron: str = DEFAULT_BROADCAST_CRON
    timezone: str | None = None  # None means the host's local zone


@dataclass(frozen=True)
class ServerConfig:
    """Bind address for the HTTP webhook."""
    host: str = "0.0.0.0"
    port: int = 8080


@dataclass(frozen=True)
class Config:
    """
    Root configuration object.

    Built once by load_config() and handed to every component:
        config.slack.bot_token
        config.foodtruck.base_url
        config.broadcast.location_ids
    """
    slack: SlackConfig
    foodtruck: FoodTruckConfig = field(default_factory=FoodTruckConfig)
    broadcast: BroadcastConfig = field(default_factory=BroadcastConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = "info"

    @property
    def broadcast_enabled(self) -> bool:
        """True when everything the weekday broadcast needs is present."""
        return bool(
            self.slack.bot_token
            and self.slack.channel
            and self.broadcast.location_ids
        )


def load_config(env: Mapping[str, str] | None = None) -> Config:
    """
    Load and validate all configuration.

    When no mapping is given the .env file is loaded first and the
    process environment is used.

    Args:
        env: Optional mapping to read instead of os.environ

    Returns:
        Config: The validated configuration

    Raises:
        ConfigError: If required configuration is missing or invalid
    """
    if env is None:
        load_dotenv()
        env = os.environ

    mode = (_optional(env, "SLACK_MODE", "http") or "http").lower()
    if mode not in SLACK_MODES:
        raise ConfigError(
            f"SLACK_MODE must be one of {', '.join(SLACK_MODES)}, got: {mode}"
        )

    app_token = _optional(env, "SLACK_APP_TOKEN", None)
    if mode == "socket" and not app_token:
        raise ConfigError(
            "Missing required environment variable: SLACK_APP_TOKEN\n"
            "Socket Mode needs an app-level token (xapp-...)."
        )

    return Config(
        slack=SlackConfig(
            bot_token=_required(env, "SLACK_BOT_TOKEN", "TOKEN"),
            mode=mode,
            app_token=app_token,
            signing_secret=_optional(env, "SLACK_SIGNING_SECRET", None),
            channel=_optional(env, "CHANNEL", None),
        ),
        foodtruck=FoodTruckConfig(
            base_url=(_optional(env, "FOODTRUCK_API_URL", DEFAULT_API_URL) or DEFAULT_API_URL).rstrip("/"),
            timeout_seconds=_optional_int(env, "FOODTRUCK_TIMEOUT_SECONDS", 10),
        ),
        broadcast=BroadcastConfig(
            location_ids=_split_ids(env.get("LOCATION_IDS")),
            cron=_optional(env, "BROADCAST_CRON", DEFAULT_BROADCAST_CRON) or DEFAULT_BROADCAST_CRON,
            timezone=_optional(env, "BROADCAST_TIMEZONE", None),
        ),
        server=ServerConfig(
            host=_optional(env, "LISTEN_HOST", "0.0.0.0") or "0.0.0.0",
            port=_optional_int(env, "LISTEN_PORT", 8080),
        ),
        log_level=(_optional(env, "LOG_LEVEL", "info") or "info").lower(),
    )
