"""Tests for NotificationService start / wait / shutdown."""

import asyncio
import logging

from bullhorn.core.keys import npub
from bullhorn.core.live_events import LiveEventScheduler
from bullhorn.core.models.event import EventKind
from bullhorn.core.service import NotificationService
from bullhorn.transport.queue_source import QueueSubscriptionSource
from tests.helpers.runtime import wait_for
from tests.helpers.stubs import ME, make_event, make_live_event


class _ParkedScheduler(LiveEventScheduler):
    def __init__(self, notifier) -> None:
        super().__init__(notifier)
        self.cancelled = False

    async def notify_and_remind(self, event) -> None:
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            self.cancelled = True
            raise


class TestNotificationService:
    async def test_start_subscribes_with_configured_lookbacks(self, config, store, notifier):
        config = config.model_copy(update={"note_lookback_hours": 1})
        source = QueueSubscriptionSource(store)
        service = NotificationService(config, source, store, notifier)

        await service.start()
        await wait_for(lambda: source.subscribed)
        assert service.is_running
        assert source.filters[1].since == source.filters[2].since - 3600

        await service.shutdown()
        assert not service.is_running

    async def test_start_logs_watched_npub(self, config, store, notifier, caplog):
        caplog.set_level(logging.INFO, logger="bullhorn.core.service")
        service = NotificationService(config, QueueSubscriptionSource(store), store, notifier)

        await service.start()
        await service.shutdown()

        assert f"watching {npub(ME)}" in caplog.text

    async def test_wait_returns_when_source_closes(self, config, store, notifier):
        source = QueueSubscriptionSource(store)
        service = NotificationService(config, source, store, notifier)
        await service.start()
        await wait_for(lambda: source.subscribed)

        source.push(make_event(EventKind.ENCRYPTED_DIRECT_MESSAGE, tags=[["p", ME]]))
        source.close()
        await asyncio.wait_for(service.wait(), timeout=2)

        assert notifier.titles() == ["New DM Received"]
        assert not service.is_running

    async def test_shutdown_abandons_pending_reminders(self, config, store, notifier):
        source = QueueSubscriptionSource(store)
        scheduler = _ParkedScheduler(notifier)
        service = NotificationService(config, source, store, notifier, scheduler=scheduler)
        await service.start()
        await wait_for(lambda: source.subscribed)

        source.push(make_live_event([["d", "s"]]))
        await wait_for(lambda: service.router is not None and len(service.router.live_tasks) == 1)

        await asyncio.wait_for(service.shutdown(), timeout=2)
        assert scheduler.cancelled
