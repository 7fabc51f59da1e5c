"""Short-lived cache for the full product and category lists.

One slot per cached list, not per query: the storefront only ever reads
the whole list. Reads through the cache never raise for a backend
failure; they fall back to the last value, stale or not, and then to an
empty list.

Concurrent misses are not de-duplicated. Each one fetches, and whichever
completes last owns the slot.
"""

from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable, Generic, TypeVar

from meubles.domain.exceptions import DomainException

logger = logging.getLogger(__name__)

T = TypeVar("T")

CACHE_TTL_SECONDS = 5 * 60


class CachedList(Generic[T]):

    def __init__(
        self,
        name: str,
        ttl: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.name = name
        self._ttl = ttl
        self._clock = clock
        self._value: tuple[T, ...] | None = None
        self._fetched_at = 0.0

    @property
    def has_value(self) -> bool:
        return self._value is not None

    def is_fresh(self) -> bool:
        return self._value is not None and (self._clock() - self._fetched_at) < self._ttl

    def store(self, value: list[T]) -> None:
        self._value = tuple(value)
        self._fetched_at = self._clock()

    def invalidate(self) -> None:
        self._value = None
        self._fetched_at = 0.0

    async def get(self, fetch: Callable[[], Awaitable[list[T]]]) -> list[T]:
        if self.is_fresh():
            return list(self._value)  # type: ignore[arg-type]

        try:
            value = await fetch()
        except DomainException as exc:
            logger.error("Error fetching %s: %s", self.name, exc)
            if self._value is not None:
                logger.warning("Using cached %s due to fetch error", self.name)
                return list(self._value)
            return []

        self.store(value)
        return list(value)
