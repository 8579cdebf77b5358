from __future__ import annotations

from abc import ABC, abstractmethod

import httpx

from models.item import FeedItem

DEFAULT_FETCH_LIMIT = 20


class FetchError(Exception):
    """Recoverable failure to fetch a feed page.

    Covers authentication failures, network errors, rate-limit rejections
    and unreadable responses. The poll cycle skips the affected mapping and
    tries again on the next tick.
    """


class FeedProvider(ABC):
    """Abstract base for feed adapters.

    Each concrete provider fetches the most recent items produced by one
    account and normalizes them into FeedItem objects.

    A shared ``httpx.AsyncClient`` is injected at construction time so
    that all adapters reuse one connection pool.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable provider name (e.g. 'Twitter')."""

    @abstractmethod
    async def fetch_recent(
        self, identity: int, limit: int = DEFAULT_FETCH_LIMIT
    ) -> list[FeedItem]:
        """Return up to ``limit`` of the newest items for ``identity``.

        The order of the returned list is unspecified. An account with no
        data yields an empty list; every other failure raises FetchError.
        """
