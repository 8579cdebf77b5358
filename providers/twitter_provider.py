from __future__ import annotations

import logging

import httpx

from models.item import FeedItem, is_valid_item_id
from providers.base import DEFAULT_FETCH_LIMIT, FeedProvider, FetchError

_API_BASE = "https://api.twitter.com/2"
# liked_tweets rejects max_results outside this window.
_MIN_RESULTS = 10
_MAX_RESULTS = 100

log = logging.getLogger(__name__)


class TwitterLikesProvider(FeedProvider):
    """Provider adapter for the posts an account has liked, via API v2.

    Authenticates with an app-only bearer token.
    """

    def __init__(self, client: httpx.AsyncClient, bearer_token: str) -> None:
        super().__init__(client)
        self._headers = {"Authorization": f"Bearer {bearer_token}"}

    @property
    def name(self) -> str:
        return "Twitter"

    async def fetch_recent(
        self, identity: int, limit: int = DEFAULT_FETCH_LIMIT
    ) -> list[FeedItem]:
        max_results = max(_MIN_RESULTS, min(limit, _MAX_RESULTS))
        url = f"{_API_BASE}/users/{identity}/liked_tweets"

        try:
            resp = await self._client.get(
                url,
                headers=self._headers,
                params={"max_results": max_results},
            )
        except httpx.HTTPError as exc:
            raise FetchError(f"[{self.name}] HTTP error for user {identity}: {exc}") from exc

        if resp.status_code in (401, 403):
            raise FetchError(
                f"[{self.name}] Authentication rejected ({resp.status_code}) for user {identity}"
            )
        if resp.status_code == 429:
            reset = resp.headers.get("x-rate-limit-reset", "unknown")
            raise FetchError(f"[{self.name}] Rate limited for user {identity} (reset={reset})")
        if resp.status_code != 200:
            raise FetchError(
                f"[{self.name}] Unexpected status {resp.status_code} for user {identity}"
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise FetchError(f"[{self.name}] Unreadable response for user {identity}") from exc

        entries = payload.get("data") if isinstance(payload, dict) else None
        if not entries:
            log.debug("[%s] No liked posts for user %d", self.name, identity)
            return []

        items: list[FeedItem] = []
        for entry in entries:
            try:
                item_id = int(entry["id"])
            except (KeyError, TypeError, ValueError) as exc:
                raise FetchError(
                    f"[{self.name}] Malformed entry for user {identity}: {entry!r}"
                ) from exc
            if not is_valid_item_id(item_id):
                raise FetchError(
                    f"[{self.name}] Malformed entry for user {identity}: id out of range {entry!r}"
                )
            items.append(FeedItem(id=item_id))

        return items[:limit]
