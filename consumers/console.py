from __future__ import annotations

from consumers.base import DeliverySink


class ConsoleSink(DeliverySink):
    """Dry-run sink that prints messages to stdout instead of posting them."""

    async def deliver(self, destination: int, text: str) -> None:
        print(f"[channel {destination}] {text}", flush=True)
