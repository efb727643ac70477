"""Queue-backed subscription source.

Events are pushed in (from tests, the dev CLI, or a reader thread) and
delivered to the single consumer of :meth:`notifications`.

Key behaviours:
* Only events matching a subscribed filter are delivered.
* Each event id is delivered once; every delivered event is saved to the
  attached store.
* Bounded queue — on overflow the oldest item is dropped and the consumer
  sees a :class:`Lagged` notice before its next item.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator

from bullhorn.core.interfaces.transport import (
    Lagged,
    RelayEvent,
    RelayNotification,
    Shutdown,
    SubscriptionSource,
)
from bullhorn.core.models.event import Event
from bullhorn.core.models.filter import Filter
from bullhorn.transport.store import InMemoryEventStore

_log = logging.getLogger(__name__)

_CLOSED = object()


class QueueSubscriptionSource(SubscriptionSource):
    """In-process :class:`SubscriptionSource`.

    Args:
        store: Store that receives every delivered event.
        queue_size: Maximum number of undelivered notifications.
    """

    def __init__(self, store: InMemoryEventStore | None = None, queue_size: int = 1000) -> None:
        self._store = store if store is not None else InMemoryEventStore()
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=queue_size)
        self._filters: list[Filter] | None = None
        self._seen: set[str] = set()
        self._dropped = 0
        self._closed = False

    @property
    def store(self) -> InMemoryEventStore:
        return self._store

    @property
    def subscribed(self) -> bool:
        return self._filters is not None

    @property
    def filters(self) -> list[Filter]:
        return list(self._filters or [])

    # ------------------------------------------------------------------
    # SubscriptionSource
    # ------------------------------------------------------------------

    async def notifications(self) -> AsyncIterator[RelayNotification]:
        while True:
            item = await self._queue.get()
            if self._dropped:
                skipped, self._dropped = self._dropped, 0
                yield Lagged(skipped=skipped)
            if item is _CLOSED:
                return
            yield item  # type: ignore[misc]

    async def subscribe(self, filters: list[Filter]) -> None:
        self._filters = list(filters)
        _log.info("Subscribed with %d filters", len(self._filters))

    async def shutdown(self) -> None:
        if self._closed:
            return
        self._enqueue(Shutdown())
        self.close()

    # ------------------------------------------------------------------
    # Producer side
    # ------------------------------------------------------------------

    def push(self, event: Event, relay_url: str = "") -> bool:
        """Offer *event* as if received from *relay_url*.

        Returns:
            ``True`` if the event was delivered to the consumer.
        """
        if self._closed:
            return False
        if self._filters is None:
            _log.debug("Event %s received before subscribing; dropped", event.id)
            return False
        if not any(f.matches(event) for f in self._filters):
            return False
        if event.id in self._seen:
            return False
        self._seen.add(event.id)
        self._store.save(event)
        self._enqueue(RelayEvent(event=event, relay_url=relay_url))
        return True

    def push_lag(self, skipped: int) -> None:
        """Report *skipped* notifications lost upstream."""
        self._enqueue(Lagged(skipped=skipped))

    def close(self) -> None:
        """Close the stream permanently; the consumer's iteration ends."""
        if self._closed:
            return
        self._closed = True
        self._enqueue(_CLOSED)

    def _enqueue(self, item: object) -> None:
        try:
            self._queue.put_nowait(item)
        except asyncio.QueueFull:
            # Drop oldest to make room.
            try:
                self._queue.get_nowait()
            except asyncio.QueueEmpty:
                pass
            self._dropped += 1
            _log.warning("Subscription queue overflow — dropped oldest notification")
            self._queue.put_nowait(item)
