from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from consumers.base import DeliverySink
from core.dedup import DeduplicationStore, DedupStoreError
from core.engine import run_cycle
from models.item import CycleResult, TrackedMapping
from providers.base import DEFAULT_FETCH_LIMIT, FeedProvider

log = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 180


class Scheduler:
    """Drives the poll cycle on a fixed interval, forever.

    The scheduler is the only owner of the DeduplicationStore; nothing
    else reads or writes it while the loop is alive. Cycles run strictly
    one after another, so no locking is needed around the store.

    ``start()`` returns the loop task and is idempotent: a second call
    hands back the task that is already running.
    """

    def __init__(
        self,
        mappings: Sequence[TrackedMapping],
        store: DeduplicationStore,
        provider: FeedProvider,
        sink: DeliverySink,
        interval_seconds: float = DEFAULT_POLL_INTERVAL,
        fetch_limit: int = DEFAULT_FETCH_LIMIT,
    ) -> None:
        self._mappings = tuple(mappings)
        self._store = store
        self._provider = provider
        self._sink = sink
        self._interval = interval_seconds
        self._fetch_limit = fetch_limit
        self._task: asyncio.Task[None] | None = None

    @property
    def task(self) -> asyncio.Task[None] | None:
        return self._task

    def start(self) -> asyncio.Task[None]:
        if self._task is None:
            self._task = asyncio.create_task(self.run(), name="scheduler")
        else:
            log.debug("Scheduler already started, reusing running task")
        return self._task

    async def run_once(self) -> CycleResult:
        """Run a single cycle and persist the store if it changed.

        Persistence failures propagate: without durable state the bridge
        cannot promise it won't relay the same post again.
        """
        result = await run_cycle(
            self._mappings,
            self._store,
            self._provider,
            self._sink,
            limit=self._fetch_limit,
        )

        if result.mutated:
            self._store.persist()
            log.info(
                "Cycle relayed %d new post(s) (%d failed), %d total tracked",
                result.delivered,
                result.failed,
                self._store.size,
            )

        if result.skipped_mappings:
            log.warning(
                "Cycle skipped %d of %d mapping(s) after fetch errors",
                result.skipped_mappings,
                len(self._mappings),
            )

        return result

    async def run(self) -> None:
        """Loop forever: cycle, persist if needed, sleep.

        A crash inside one cycle is logged and the next cycle runs on
        schedule. Dedup storage errors are never absorbed.
        """
        log.info(
            "Scheduler started for %d mapping(s) (interval=%ss)",
            len(self._mappings),
            self._interval,
        )

        while True:
            try:
                await self.run_once()
            except DedupStoreError:
                log.critical("Dedup state could not be saved, stopping")
                raise
            except Exception:
                log.exception("Poll cycle failed")
                # Ids recorded before the crash must still reach disk.
                if self._store.dirty:
                    self._store.persist()

            await asyncio.sleep(self._interval)
