"""Notification router: dispatch accepted events to the right sender."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from bullhorn.core.interfaces.transport import Notifier
from bullhorn.core.live_events import LiveEventScheduler
from bullhorn.core.models.event import Event, EventKind
from bullhorn.core.models.notification import Notification
from bullhorn.core.zaps import get_zap_request_amount
from bullhorn.notify.messages import comment_notification, dm_notification

_log = logging.getLogger(__name__)


class NotificationRouter:
    """Consume accepted events until the channel closes.

    * DMs and comments are notified directly (best effort).
    * Zap amounts are handed to the aggregator's channel without blocking.
    * Each live event gets its own scheduler task.

    Args:
        notifier: Push channel.
        channel: Accepted events; ``None`` marks closure.
        zap_channel: Input of the zap aggregator.  ``None`` is put on it when
            the router stops.
        scheduler: Live event scheduler.
    """

    def __init__(
        self,
        notifier: Notifier,
        channel: asyncio.Queue[Event | None],
        zap_channel: asyncio.Queue[int | None],
        scheduler: LiveEventScheduler,
    ) -> None:
        self._notifier = notifier
        self._channel = channel
        self._zap_channel = zap_channel
        self._scheduler = scheduler
        self._live_tasks: set[asyncio.Task[None]] = set()

    @property
    def live_tasks(self) -> set[asyncio.Task[None]]:
        """Scheduler tasks still pending."""
        return self._live_tasks

    async def run(self) -> None:
        _log.info("Starting notifier loop.")
        try:
            while True:
                event = await self._channel.get()
                if event is None:
                    break
                await self.route(event)
        finally:
            await self._zap_channel.put(None)
            _log.info("Notifier task complete")

    async def route(self, event: Event) -> None:
        _log.debug("Received event to notify about: %s", event.id)
        kind = event.event_kind
        if kind is EventKind.ENCRYPTED_DIRECT_MESSAGE:
            _log.info("Sending notification about DM")
            await self._send("DM", dm_notification)
        elif kind is EventKind.TEXT_NOTE:
            _log.info("Sending notification about comment %s", event.id)
            await self._send("comment", comment_notification, event.id)
        elif kind is EventKind.ZAP_RECEIPT:
            amount = get_zap_request_amount(event)
            try:
                self._zap_channel.put_nowait(amount)
            except asyncio.QueueFull:
                _log.warning("Zap channel full; dropped %d millisats", amount)
        elif kind is EventKind.LIVE_EVENT:
            task = asyncio.create_task(
                self._scheduler.notify_and_remind(event), name=f"live-event-{event.id[:12]}"
            )
            self._live_tasks.add(task)
            task.add_done_callback(self._live_tasks.discard)

    async def _send(self, label: str, build: Callable[..., Notification], *args: Any) -> None:
        try:
            await self._notifier.send(build(*args))
        except Exception:
            _log.exception("Failed to send %s notification", label)
