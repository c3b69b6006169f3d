"""Simple in-memory TTL cache. No Redis needed for MVP.

One slot per dataset key, overwritten wholesale on every successful
populate. Expiry is checked lazily on access; nothing is evicted in the
background.

With single_flight enabled, concurrent misses for the same key share one
in-flight producer call. Disabled, every miss runs the producer and the
last one to finish wins the slot.

Note: Each uvicorn worker has its own cache instance. With --workers 2,
data may be fetched twice (once per worker).
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable

from services.dataset import Dataset

logger = logging.getLogger(__name__)

Producer = Callable[[], Awaitable[Dataset]]


@dataclass(frozen=True)
class CacheEntry:
    dataset: Dataset
    stored_at: float


class TTLCache:
    def __init__(
        self,
        ttl_seconds: float = 300,
        single_flight: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.single_flight = single_flight
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}
        self._inflight: dict[str, asyncio.Task] = {}

    def _fresh(self, key: str) -> CacheEntry | None:
        entry = self._store.get(key)
        if entry is not None and self._clock() - entry.stored_at < self.ttl_seconds:
            return entry
        return None

    def peek(self, key: str) -> Dataset | None:
        """Cached dataset regardless of age, without fetching."""
        entry = self._store.get(key)
        return entry.dataset if entry else None

    async def get_or_populate(self, key: str, producer: Producer) -> Dataset:
        entry = self._fresh(key)
        if entry is not None:
            logger.debug("Cache hit: %s", key)
            return entry.dataset

        if self.single_flight:
            pending = self._inflight.get(key)
            if pending is not None and not pending.done():
                logger.debug("Joining in-flight fetch: %s", key)
                return await asyncio.shield(pending)

        logger.debug("Cache miss: %s", key)
        return await self._populate(key, producer)

    async def force_populate(self, key: str, producer: Producer) -> Dataset:
        """Run the producer even if a fresh entry exists."""
        logger.info("Forced refresh: %s", key)
        return await self._populate(key, producer)

    async def _populate(self, key: str, producer: Producer) -> Dataset:
        if not self.single_flight:
            return self._store_result(key, await producer())

        # The fetch runs as its own task so a cancelled caller doesn't cancel it for joiners
        task = asyncio.ensure_future(self._run(key, producer))
        self._inflight[key] = task
        task.add_done_callback(lambda done: self._finish_inflight(key, done))
        return await asyncio.shield(task)

    async def _run(self, key: str, producer: Producer) -> Dataset:
        return self._store_result(key, await producer())

    def _finish_inflight(self, key: str, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        if not task.cancelled() and task.exception() is not None:
            # Retrieved here so an unjoined failure doesn't warn on GC
            logger.debug("In-flight fetch for %s failed: %s", key, task.exception())

    def _store_result(self, key: str, dataset: Dataset) -> Dataset:
        self._store[key] = CacheEntry(dataset=dataset, stored_at=self._clock())
        return dataset

    def status(self, key: str) -> dict:
        """Read-only snapshot for health reporting. Never fetches."""
        entry = self._store.get(key)
        if entry is None:
            return {"isCached": False, "lastUpdate": None, "age": None, "timeToExpiry": None}

        age = self._clock() - entry.stored_at
        return {
            "isCached": True,
            "lastUpdate": entry.dataset.fetched_at.isoformat(),
            "age": round(age, 3),
            "timeToExpiry": round(max(self.ttl_seconds - age, 0.0), 3),
        }
