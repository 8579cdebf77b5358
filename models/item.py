from __future__ import annotations

from dataclasses import dataclass

_PERMALINK_TEMPLATE = "https://twitter.com/twitter/status/{}"

MAX_ITEM_ID = 2**64 - 1


def is_valid_item_id(value: object) -> bool:
    """True for ints in the unsigned 64-bit range (bools excluded)."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= MAX_ITEM_ID


@dataclass(frozen=True)
class FeedItem:
    """A single post surfaced by a feed provider.

    Fields:
        id:  Unique post identifier. Ids are totally ordered; a higher id
             is a more recent post.
    """

    id: int

    @property
    def permalink(self) -> str:
        return _PERMALINK_TEMPLATE.format(self.id)


@dataclass(frozen=True)
class TrackedMapping:
    """Static pairing of a watched account with the channel it relays to."""

    identity: int
    destination: int


@dataclass(frozen=True)
class CycleResult:
    """Outcome of one poll cycle.

    Only ``mutated`` gates persistence; the counters feed the cycle log line.
    """

    mutated: bool
    delivered: int = 0
    failed: int = 0
    skipped_mappings: int = 0
