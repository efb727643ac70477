"""Event classifier: turns the raw relay stream into notify-worthy events.

Runs as a single long-lived task reading one notification at a time, so the
set of live events already announced is confined to this object and needs
no lock.

Per-kind rules:
* DMs and zap receipts are always forwarded.
* Notes are forwarded only when their first ``e`` reference points at a
  stored note authored by the watched identity.
* Live events are forwarded once per event id for the process lifetime.
* Everything else is dropped.
"""

from __future__ import annotations

import asyncio
import json
import logging

from bullhorn.core.filters import pubkey_receives_filters
from bullhorn.core.interfaces.transport import (
    EventLookup,
    Lagged,
    RelayEvent,
    Shutdown,
    SubscriptionSource,
)
from bullhorn.core.models.event import Event, EventKind
from bullhorn.core.models.filter import Filter

_log = logging.getLogger(__name__)


class EventClassifier:
    """Classify relay events for *pubkey* and emit accepted ones on *channel*.

    Args:
        pubkey: Watched identity (hex).
        event_npubs: Identities whose live events are announced.
        lookup: Local event store, used to validate replies.
        channel: Queue receiving accepted events.  ``None`` is put on it when
            the classifier stops, signalling closure downstream.
        filters: Subscription filters; built from *pubkey* when omitted.
    """

    def __init__(
        self,
        pubkey: str,
        event_npubs: list[str],
        lookup: EventLookup,
        channel: asyncio.Queue[Event | None],
        filters: list[Filter] | None = None,
    ) -> None:
        self._pubkey = pubkey
        self._event_npubs = list(event_npubs)
        self._lookup = lookup
        self._channel = channel
        self._filters = filters
        self._live_events_seen: set[str] = set()

    async def run(self, source: SubscriptionSource) -> None:
        """Subscribe on *source* and classify until it closes or shuts down."""
        notifications = source.notifications()
        filters = self._filters or pubkey_receives_filters(self._pubkey, self._event_npubs)
        _log.info("Subscribing with filters %s", json.dumps([f.to_wire() for f in filters]))
        await source.subscribe(filters)

        _log.info("Starting pubkey monitor task.")
        try:
            async for notification in notifications:
                if isinstance(notification, Shutdown):
                    break
                if isinstance(notification, Lagged):
                    _log.warning(
                        "Relay notifications lagged behind. Skipped %d", notification.skipped
                    )
                    continue
                if isinstance(notification, RelayEvent):
                    _log.debug(
                        "Received event from relay %s: %s",
                        notification.relay_url,
                        notification.event.id,
                    )
                    await self.handle(notification.event)
            else:
                _log.error("Relay notification stream closed. Exiting pubkey monitor loop.")
        finally:
            await self._channel.put(None)
            _log.info("Pubkey monitor task closed.")

    async def handle(self, event: Event) -> bool:
        """Classify a single *event*, forwarding it if accepted.

        Returns:
            ``True`` if the event was forwarded.
        """
        if not await self.accepts(event):
            return False
        await self._channel.put(event)
        return True

    async def accepts(self, event: Event) -> bool:
        """Apply the per-kind rules.  Records live event ids as a side effect."""
        kind = event.event_kind
        if kind in (EventKind.ENCRYPTED_DIRECT_MESSAGE, EventKind.ZAP_RECEIPT):
            return True
        if kind is EventKind.TEXT_NOTE:
            return await self._is_reply_to_us(event)
        if kind is EventKind.LIVE_EVENT:
            if event.id in self._live_events_seen:
                _log.debug("Live event %s already announced. Skipping.", event.id)
                return False
            self._live_events_seen.add(event.id)
            return True
        return False

    async def _is_reply_to_us(self, event: Event) -> bool:
        # The first referenced event is taken to be the one being replied to.
        referenced = next(event.event_ids(), None)
        if referenced is None:
            _log.debug("No event ids found in event %s. Skipping.", event.id)
            return False

        try:
            stored = await self._lookup.get_event(referenced)
        except Exception:  # noqa: BLE001
            _log.debug("Lookup of %s failed", referenced, exc_info=True)
            stored = None

        if stored is None:
            _log.debug("Event %s in comment %s not found. Skipping.", referenced, event.id)
            return False
        return stored.pubkey == self._pubkey
