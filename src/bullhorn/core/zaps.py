"""Zap receipts: amount extraction and the debounced zap aggregator."""

from __future__ import annotations

import asyncio
import logging

from bullhorn.core.errors import NotificationDeliveryError
from bullhorn.core.interfaces.transport import Notifier
from bullhorn.core.models.event import Event
from bullhorn.notify.messages import zap_notification

_log = logging.getLogger(__name__)


def get_zap_request(event: Event) -> Event | None:
    """Return the zap request embedded in a receipt's ``description`` tag."""
    tag = event.find_tag("description")
    if tag is None:
        _log.debug("no description tag found in event %s", event.id)
        return None
    request = tag.embedded_event()
    if request is None:
        _log.debug("description tag is not a valid event")
    return request


def get_zap_request_amount(event: Event) -> int:
    """Amount in millisats requested by the zap behind *event*, or 0."""
    request = get_zap_request(event)
    if request is None:
        return 0

    tag = request.find_tag("amount")
    if tag is None:
        _log.debug("no amount tag found in event %s", request.id)
        return 0
    try:
        return max(0, int(tag.content or ""))
    except ValueError:
        return 0


class ZapAggregator:
    """Coalesce bursts of zap amounts into a single notification.

    Idle until an amount arrives.  Each further amount adds to the running
    total and restarts the quiet-period timer at its full length; the
    notification goes out once *debounce* seconds pass with no new amount,
    or when the input channel closes.

    Args:
        notifier: Destination for the aggregated notification.
        channel: Amounts in millisats; ``None`` closes the channel.
        debounce: Quiet period in seconds.
    """

    def __init__(
        self,
        notifier: Notifier,
        channel: asyncio.Queue[int | None],
        debounce: float = 120.0,
    ) -> None:
        self._notifier = notifier
        self._channel = channel
        self._debounce = debounce

    async def run(self) -> None:
        while True:
            amount = await self._channel.get()
            if amount is None:
                return
            total = amount
            _log.debug("Initial zap received. Aggregating zaps for %ss", self._debounce)

            closed = False
            while True:
                try:
                    amount = await asyncio.wait_for(self._channel.get(), timeout=self._debounce)
                except asyncio.TimeoutError:
                    break
                if amount is None:
                    closed = True
                    break
                total += amount

            _log.info("Sending aggregated zap notification for amount %d millisats", total)
            await self._send(total)
            if closed:
                return

    async def _send(self, total: int) -> None:
        try:
            await self._notifier.send(zap_notification(total))
        except NotificationDeliveryError as exc:
            _log.error("Zap notification failed: %s", exc)
        except Exception:
            _log.exception("Zap notification failed")
