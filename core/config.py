"""Runtime configuration for the bridge.

Values come from the process environment. A ``.env`` file in the working
directory is loaded first via python-dotenv, so secrets stay out of the repo.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from core.scheduler import DEFAULT_POLL_INTERVAL
from models.item import TrackedMapping
from providers.base import DEFAULT_FETCH_LIMIT

DEFAULT_STATE_PATH = Path("cache") / "likes.json"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigError(Exception):
    """A required setting is missing or malformed."""


@dataclass(frozen=True)
class BridgeConfig:
    twitter_user: int
    discord_channel: int
    twitter_token: str
    discord_token: str | None
    state_path: Path = DEFAULT_STATE_PATH
    poll_interval_seconds: int = DEFAULT_POLL_INTERVAL
    fetch_limit: int = DEFAULT_FETCH_LIMIT
    dry_run: bool = False
    log_level: str = "INFO"

    @property
    def mappings(self) -> tuple[TrackedMapping, ...]:
        return (TrackedMapping(identity=self.twitter_user, destination=self.discord_channel),)


def _require(env: Mapping[str, str], key: str) -> str:
    value = env.get(key, "").strip()
    if not value:
        raise ConfigError(f"Missing required setting {key}")
    return value


def _parse_id(key: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"{key} must not be negative, got {value}")
    return value


def _parse_positive(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    value = _parse_id(key, raw)
    if value == 0:
        raise ConfigError(f"{key} must be greater than zero")
    return value


def _parse_bool(env: Mapping[str, str], key: str) -> bool:
    raw = env.get(key, "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ConfigError(f"{key} must be a boolean, got {raw!r}")


def load_config(environ: Mapping[str, str] | None = None) -> BridgeConfig:
    """Build a BridgeConfig, failing fast on missing or bad values.

    When ``environ`` is None the real environment is used, after merging
    in any ``.env`` file.
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ

    dry_run = _parse_bool(environ, "DRY_RUN")
    discord_token = environ.get("DISCORD_TOKEN", "").strip() or None
    if discord_token is None and not dry_run:
        raise ConfigError("Missing required setting DISCORD_TOKEN")

    log_level = environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"LOG_LEVEL is not a logging level: {log_level!r}")

    state_path = environ.get("STATE_PATH", "").strip()

    return BridgeConfig(
        twitter_user=_parse_id("TWITTER_USER", _require(environ, "TWITTER_USER")),
        discord_channel=_parse_id("DISCORD_CHANNEL", _require(environ, "DISCORD_CHANNEL")),
        twitter_token=_require(environ, "TWITTER_TOKEN"),
        discord_token=discord_token,
        state_path=Path(state_path) if state_path else DEFAULT_STATE_PATH,
        poll_interval_seconds=_parse_positive(
            environ, "POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL
        ),
        fetch_limit=_parse_positive(environ, "FETCH_LIMIT", DEFAULT_FETCH_LIMIT),
        dry_run=dry_run,
        log_level=log_level,
    )
