"""Realtime synchronization layer.

Keeps the list caches honest when another client writes: every change
event on a table invalidates that table's cache slot, then the
subscriber's handler runs after a short fixed delay.

The delay is applied per event. A burst of N events produces N delayed
deliveries; coalescing is left to the consumer (see ``Debouncer``).
At most one feed is open per entity type.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, AsyncIterator, Callable, Mapping

from meubles.application.cache import CachedList
from meubles.application.gateway import Gateway
from meubles.domain.exceptions import DomainException
from meubles.domain.model.change_event import ChangeEvent, EntityType
from meubles.domain.repository.backend import ChangeFeed

logger = logging.getLogger(__name__)

REALTIME_DELIVERY_DELAY = 0.1

ChangeHandler = Callable[[ChangeEvent], Any]


class RealtimeSync:

    def __init__(
        self,
        gateway: Gateway,
        caches: Mapping[EntityType, CachedList],
        delay: float = REALTIME_DELIVERY_DELAY,
    ) -> None:
        self._gateway = gateway
        self._caches = dict(caches)
        self._delay = delay
        self._feeds: dict[EntityType, ChangeFeed] = {}
        self._tasks: set[asyncio.Task] = set()

    @property
    def active(self) -> frozenset[EntityType]:
        return frozenset(self._feeds)

    def feed_for(self, entity: EntityType) -> ChangeFeed | None:
        return self._feeds.get(entity)

    # --- Subscriptions --------------------------------------------------------

    async def subscribe(self, entity: EntityType, handler: ChangeHandler) -> ChangeFeed | None:
        """Open the feed for *entity*, replacing any feed already open.

        Returns None when the backend refuses the subscription; the
        failure is logged and no feed is recorded.
        """
        await self.unsubscribe(entity)
        loop = asyncio.get_running_loop()

        def on_change(event: ChangeEvent) -> None:
            cache = self._caches.get(entity)
            if cache is not None:
                cache.invalidate()
            loop.call_later(self._delay, self._deliver, handler, event)

        try:
            feed = await self._gateway.open_feed(entity, on_change)
        except DomainException as exc:
            logger.error("Error setting up %s subscription: %s", entity.value, exc)
            return None

        # another subscribe for the same entity may have finished meanwhile
        previous = self._feeds.pop(entity, None)
        if previous is not None:
            await self._close(entity, previous)

        self._feeds[entity] = feed
        logger.info("%s subscription active", entity.value.capitalize())
        return feed

    async def unsubscribe(self, entity: EntityType) -> None:
        feed = self._feeds.pop(entity, None)
        if feed is not None:
            await self._close(entity, feed)

    async def unsubscribe_all(self) -> None:
        """Close every open feed once; safe with nothing open."""
        feeds = list(self._feeds.items())
        self._feeds.clear()
        for entity, feed in feeds:
            await self._close(entity, feed)

    async def changes(self, entity: EntityType) -> AsyncIterator[ChangeEvent]:
        """Iterate over change events for *entity*.

        Iterating opens the feed, closing the iterator closes it again.
        Ends immediately when the subscription cannot be set up.
        """
        queue: asyncio.Queue[ChangeEvent] = asyncio.Queue()
        feed = await self.subscribe(entity, queue.put_nowait)
        if feed is None:
            return
        try:
            while True:
                yield await queue.get()
        finally:
            if self._feeds.get(entity) is feed:
                await self.unsubscribe(entity)

    # --- Internal helpers -----------------------------------------------------

    async def _close(self, entity: EntityType, feed: ChangeFeed) -> None:
        try:
            await feed.close()
        except DomainException as exc:
            logger.error("Error unsubscribing from %s channel: %s", entity.value, exc)
        else:
            logger.info("Unsubscribed from %s channel", entity.value)

    def _deliver(self, handler: ChangeHandler, event: ChangeEvent) -> None:
        try:
            result = handler(event)
        except Exception:
            logger.exception("%s change handler failed", event.entity.value)
            return
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Change handler failed: %s", task.exception())
