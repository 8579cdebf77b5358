from __future__ import annotations

import os
from pathlib import Path

import pytest

from core.config import DEFAULT_STATE_PATH, ConfigError, load_config
from models.item import TrackedMapping

BASE = {
    "TWITTER_USER": "12345",
    "DISCORD_CHANNEL": "67890",
    "TWITTER_TOKEN": "bearer",
    "DISCORD_TOKEN": "bot",
}


def test_defaults() -> None:
    config = load_config(dict(BASE))

    assert config.mappings == (TrackedMapping(identity=12345, destination=67890),)
    assert config.state_path == DEFAULT_STATE_PATH
    assert config.poll_interval_seconds == 180
    assert config.fetch_limit == 20
    assert not config.dry_run
    assert config.log_level == "INFO"


def test_overrides() -> None:
    config = load_config(
        {
            **BASE,
            "STATE_PATH": "/var/lib/bridge/seen.json",
            "POLL_INTERVAL_SECONDS": "60",
            "FETCH_LIMIT": "50",
            "LOG_LEVEL": "debug",
        }
    )

    assert config.state_path == Path("/var/lib/bridge/seen.json")
    assert config.poll_interval_seconds == 60
    assert config.fetch_limit == 50
    assert config.log_level == "DEBUG"


def test_dry_run_does_not_need_chat_token() -> None:
    env = {k: v for k, v in BASE.items() if k != "DISCORD_TOKEN"}
    env["DRY_RUN"] = "yes"

    config = load_config(env)

    assert config.dry_run
    assert config.discord_token is None


@pytest.mark.parametrize("missing", ["TWITTER_USER", "DISCORD_CHANNEL", "TWITTER_TOKEN", "DISCORD_TOKEN"])
def test_missing_required_setting(missing) -> None:
    env = {k: v for k, v in BASE.items() if k != missing}
    with pytest.raises(ConfigError, match=missing):
        load_config(env)


@pytest.mark.parametrize(
    "key, value",
    [
        ("TWITTER_USER", "abc"),
        ("DISCORD_CHANNEL", "-1"),
        ("POLL_INTERVAL_SECONDS", "0"),
        ("FETCH_LIMIT", "lots"),
        ("DRY_RUN", "maybe"),
        ("LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values(key, value) -> None:
    with pytest.raises(ConfigError):
        load_config({**BASE, key: value})


def test_reads_dotenv_file(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(os, "environ", {})
    (tmp_path / ".env").write_text("".join(f"{k}={v}\n" for k, v in BASE.items()))
    monkeypatch.chdir(tmp_path)

    config = load_config()

    assert config.twitter_user == 12345
    assert config.discord_token == "bot"
