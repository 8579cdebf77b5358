from __future__ import annotations

from collections.abc import Iterable

import pytest

from consumers.base import DeliveryError, DeliverySink
from models.item import FeedItem
from providers.base import FeedProvider, FetchError


class FakeProvider(FeedProvider):
    """Serves canned ids per identity; identities in ``failing`` raise."""

    def __init__(self, feeds: dict[int, Iterable[int]], failing: Iterable[int] = ()) -> None:
        super().__init__(client=None)  # type: ignore[arg-type]
        self.feeds = {identity: list(ids) for identity, ids in feeds.items()}
        self.failing = set(failing)
        self.calls: list[tuple[int, int]] = []

    @property
    def name(self) -> str:
        return "Fake"

    async def fetch_recent(self, identity: int, limit: int = 20) -> list[FeedItem]:
        self.calls.append((identity, limit))
        if identity in self.failing:
            raise FetchError(f"boom for {identity}")
        return [FeedItem(id=i) for i in self.feeds.get(identity, [])]


class FakeSink(DeliverySink):
    """Records deliveries; texts containing any of ``fail_on`` raise."""

    def __init__(self, fail_on: Iterable[str] = ()) -> None:
        self.fail_on = set(fail_on)
        self.attempts: list[tuple[int, str]] = []
        self.sent: list[tuple[int, str]] = []

    async def deliver(self, destination: int, text: str) -> None:
        self.attempts.append((destination, text))
        if any(marker in text for marker in self.fail_on):
            raise DeliveryError(f"cannot post {text}")
        self.sent.append((destination, text))


def status_ids(texts: Iterable[str]) -> list[int]:
    return [int(t.rsplit("/", 1)[1]) for t in texts]


@pytest.fixture
def fake_sink() -> FakeSink:
    return FakeSink()
