"""Likes bridge -- entry point.

Assembles the relay:

    Scheduler (one asyncio task, fixed interval)
        -> TwitterLikesProvider.fetch_recent()
        -> DeduplicationStore (skip ids already relayed)
        -> DeliverySink.deliver() (Discord channel, or stdout on DRY_RUN)
        -> DeduplicationStore.persist() when the cycle relayed anything

A shared httpx.AsyncClient is injected into the provider and the sink.
"""
from __future__ import annotations

import asyncio
import logging
import sys

import httpx

from consumers.base import DeliverySink
from consumers.console import ConsoleSink
from consumers.discord_sink import DiscordChannelSink
from core.config import BridgeConfig, ConfigError, load_config
from core.dedup import DeduplicationStore, DedupStoreError
from core.scheduler import Scheduler
from providers.twitter_provider import TwitterLikesProvider

log = logging.getLogger("bridge")


def _build_sink(config: BridgeConfig, client: httpx.AsyncClient) -> DeliverySink:
    if config.dry_run:
        log.info("DRY_RUN set, printing messages instead of posting")
        return ConsoleSink()
    if config.discord_token is None:
        raise ConfigError("Missing required setting DISCORD_TOKEN")
    return DiscordChannelSink(client=client, bot_token=config.discord_token)


async def run(config: BridgeConfig) -> None:
    store = DeduplicationStore.load(config.state_path)

    async with httpx.AsyncClient(timeout=30.0) as client:
        scheduler = Scheduler(
            mappings=config.mappings,
            store=store,
            provider=TwitterLikesProvider(client=client, bearer_token=config.twitter_token),
            sink=_build_sink(config, client),
            interval_seconds=config.poll_interval_seconds,
            fetch_limit=config.fetch_limit,
        )
        await scheduler.start()


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        config = load_config()
    except ConfigError as exc:
        log.error("Invalid configuration: %s", exc)
        return 2

    logging.getLogger().setLevel(config.log_level)

    try:
        asyncio.run(run(config))
    except ConfigError as exc:
        log.error("Invalid configuration: %s", exc)
        return 2
    except DedupStoreError as exc:
        log.error("Dedup state failure: %s", exc)
        return 1
    except KeyboardInterrupt:
        print("\nShutting down.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
