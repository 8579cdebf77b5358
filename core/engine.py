from __future__ import annotations

import logging
from collections.abc import Sequence

from consumers.base import DeliveryError, DeliverySink
from core.dedup import DeduplicationStore
from models.item import CycleResult, TrackedMapping
from providers.base import DEFAULT_FETCH_LIMIT, FeedProvider, FetchError

log = logging.getLogger(__name__)


async def run_cycle(
    mappings: Sequence[TrackedMapping],
    store: DeduplicationStore,
    provider: FeedProvider,
    sink: DeliverySink,
    *,
    limit: int = DEFAULT_FETCH_LIMIT,
) -> CycleResult:
    """Run one pass over every mapping, in configured order.

    For each mapping:
    1. fetch the newest items for the identity (FetchError skips the mapping)
    2. sort by id, newest first; this is the delivery order
    3. relay every id not yet in the store, then record it

    An id is recorded even when its delivery failed, so a flaky channel
    can never cause the same post to be relayed twice.
    """
    mutated = False
    delivered = 0
    failed = 0
    skipped = 0

    for mapping in mappings:
        try:
            items = await provider.fetch_recent(mapping.identity, limit)
        except FetchError as exc:
            log.warning("Skipping user %d this cycle: %s", mapping.identity, exc)
            skipped += 1
            continue

        for item in sorted(items, key=lambda i: i.id, reverse=True):
            if store.contains(item.id):
                continue

            try:
                await sink.deliver(mapping.destination, item.permalink)
                delivered += 1
            except DeliveryError as exc:
                log.warning(
                    "Delivery of %d to channel %d failed, not retrying: %s",
                    item.id,
                    mapping.destination,
                    exc,
                )
                failed += 1

            store.insert(item.id)
            mutated = True

    return CycleResult(
        mutated=mutated,
        delivered=delivered,
        failed=failed,
        skipped_mappings=skipped,
    )
