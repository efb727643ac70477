"""NotificationService — startup & shutdown orchestration.

Wires classifier → router → {notifier, zap aggregator, live event
scheduler} together over bounded queues and owns their tasks.
"""

from __future__ import annotations

import asyncio
import logging

from bullhorn.core.classifier import EventClassifier
from bullhorn.core.filters import pubkey_receives_filters
from bullhorn.core.interfaces.transport import EventLookup, Notifier, SubscriptionSource
from bullhorn.core.keys import npub
from bullhorn.core.live_events import LiveEventScheduler
from bullhorn.core.models.config import BullhornConfig
from bullhorn.core.models.event import Event
from bullhorn.core.router import NotificationRouter
from bullhorn.core.zaps import ZapAggregator

_log = logging.getLogger(__name__)


class NotificationService:
    """Top-level orchestrator for the notification pipeline.

    Args:
        config: Validated configuration.
        source: Relay notification stream.
        lookup: Local event store used to validate replies.
        notifier: Push channel.
        scheduler: Live event scheduler; built from *config* when omitted.
    """

    def __init__(
        self,
        config: BullhornConfig,
        source: SubscriptionSource,
        lookup: EventLookup,
        notifier: Notifier,
        scheduler: LiveEventScheduler | None = None,
    ) -> None:
        self._config = config
        self._source = source
        self._lookup = lookup
        self._notifier = notifier
        self._scheduler = scheduler or LiveEventScheduler(
            notifier, reminder_lead=config.reminder_lead_seconds
        )

        # Created during start()
        self._classifier: EventClassifier | None = None
        self._router: NotificationRouter | None = None
        self._tasks: list[asyncio.Task[None]] = []

    # ------------------------------------------------------------------
    # Public properties
    # ------------------------------------------------------------------

    @property
    def router(self) -> NotificationRouter | None:
        """The router (available after ``start()``)."""
        return self._router

    @property
    def is_running(self) -> bool:
        return any(not t.done() for t in self._tasks)

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Create the queues and launch classifier, router and aggregator."""
        _log.info("NotificationService starting …")
        cfg = self._config

        events: asyncio.Queue[Event | None] = asyncio.Queue(maxsize=cfg.event_channel_size)
        zaps: asyncio.Queue[int | None] = asyncio.Queue(maxsize=cfg.zap_channel_size)

        filters = pubkey_receives_filters(
            cfg.npub,
            cfg.event_npubs,
            note_lookback_hours=cfg.note_lookback_hours,
            live_event_lookback_hours=cfg.live_event_lookback_hours,
        )
        self._classifier = EventClassifier(
            cfg.npub, cfg.event_npubs, self._lookup, events, filters=filters
        )
        self._router = NotificationRouter(self._notifier, events, zaps, self._scheduler)
        aggregator = ZapAggregator(self._notifier, zaps, debounce=cfg.zap_debounce_seconds)

        self._tasks = [
            asyncio.create_task(self._classifier.run(self._source), name="pubkey-monitor"),
            asyncio.create_task(self._router.run(), name="notifier"),
            asyncio.create_task(aggregator.run(), name="zap-aggregator"),
        ]
        _log.info("NotificationService started (watching %s)", npub(cfg.npub))

    async def wait(self) -> None:
        """Block until the pipeline has drained (source closed or shut down)."""
        results = await asyncio.gather(*self._tasks, return_exceptions=True)
        for task, result in zip(self._tasks, results):
            if isinstance(result, Exception):
                _log.error("Task %s failed: %s", task.get_name(), result, exc_info=result)

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    async def shutdown(self) -> None:
        """Stop intake, drain the pipeline and abandon pending reminders."""
        _log.info("NotificationService shutting down")
        await self._source.shutdown()
        await self.wait()

        if self._router is not None:
            pending = list(self._router.live_tasks)
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        _log.info("NotificationService shutdown complete")
