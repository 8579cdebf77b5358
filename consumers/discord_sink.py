from __future__ import annotations

import logging

import httpx

from consumers.base import DeliveryError, DeliverySink

_API_BASE = "https://discord.com/api/v10"

log = logging.getLogger(__name__)


class DiscordChannelSink(DeliverySink):
    """Posts messages to Discord text channels through the REST API.

    Uses bot-token auth and an empty ``allowed_mentions`` parse list, so
    ``@everyone`` or user mentions in the text are rendered but never ping.
    """

    def __init__(self, client: httpx.AsyncClient, bot_token: str) -> None:
        self._client = client
        self._headers = {"Authorization": f"Bot {bot_token}"}

    async def deliver(self, destination: int, text: str) -> None:
        url = f"{_API_BASE}/channels/{destination}/messages"
        body = {"content": text, "allowed_mentions": {"parse": []}}

        try:
            resp = await self._client.post(url, headers=self._headers, json=body)
        except httpx.HTTPError as exc:
            raise DeliveryError(f"HTTP error posting to channel {destination}: {exc}") from exc

        if not resp.is_success:
            raise DeliveryError(
                f"Channel {destination} rejected message ({resp.status_code}): {resp.text[:200]}"
            )

        log.debug("Posted to channel %d", destination)
