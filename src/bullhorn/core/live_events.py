"""Live event announcements: tag parsing and the reminder scheduler."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Iterable

from bullhorn.core.errors import LiveEventParseError
from bullhorn.core.interfaces.transport import Notifier
from bullhorn.core.models.event import Event, Tag
from bullhorn.core.models.live_event import (
    LiveEventHost,
    LiveEventImage,
    LiveEventParticipant,
    LiveEventRecord,
)
from bullhorn.log_config.logger import ContextualLogger
from bullhorn.notify.messages import live_event_notification

_log = logging.getLogger(__name__)

_STRING_FIELDS = {
    "title": "title",
    "summary": "summary",
    "streaming": "streaming",
    "recording": "recording",
    "status": "status",
}
_INT_FIELDS = {
    "starts": "starts",
    "ends": "ends",
    "current_participants": "current_participants",
    "total_participants": "total_participants",
}


def tags_to_live_event(tags: Iterable[Tag]) -> LiveEventRecord:
    """Fold *tags* into a :class:`LiveEventRecord`.

    Unrecognised tags are ignored.  Role-marked ``p`` tags go to ``host``
    (a later host tag replaces an earlier one), ``speakers`` or
    ``participants``.

    Raises:
        LiveEventParseError: If the ``d`` tag is missing or empty.
    """
    tags = list(tags)
    d_tag = next((t for t in tags if t.kind == "d"), None)
    if d_tag is None:
        raise LiveEventParseError("'d' tag missing")
    if not d_tag.content:
        raise LiveEventParseError("'d' tag missing content")

    fields: dict[str, object] = {"id": d_tag.content}
    hashtags: list[str] = []
    relays: list[str] = []
    speakers: list[LiveEventParticipant] = []
    participants: list[LiveEventParticipant] = []

    for tag in tags:
        value = tag.content
        if tag.kind in _STRING_FIELDS and value is not None:
            fields[_STRING_FIELDS[tag.kind]] = value
        elif tag.kind in _INT_FIELDS and value is not None:
            try:
                fields[_INT_FIELDS[tag.kind]] = int(value)
            except ValueError:
                _log.debug("Ignoring non-numeric %s tag: %r", tag.kind, value)
        elif tag.kind == "t" and value:
            hashtags.append(value)
        elif tag.kind == "relays":
            relays.extend(v for v in tag.values[1:] if v)
        elif tag.kind == "image" and value:
            fields["image"] = LiveEventImage(url=value, dimensions=_parse_dimensions(tag.get(2)))
        elif tag.kind == "p" and value:
            marker = (tag.get(3) or "").lower()
            relay_url = tag.get(2) or None
            if marker == "host":
                fields["host"] = LiveEventHost(
                    public_key=value, relay_url=relay_url, proof=tag.get(4) or None
                )
            elif marker == "speaker":
                speakers.append(LiveEventParticipant(public_key=value, relay_url=relay_url))
            elif marker == "participant":
                participants.append(LiveEventParticipant(public_key=value, relay_url=relay_url))

    return LiveEventRecord(
        **fields,
        hashtags=hashtags,
        relays=relays,
        speakers=speakers,
        participants=participants,
    )


def _parse_dimensions(raw: str | None) -> tuple[int, int] | None:
    if not raw:
        return None
    width, sep, height = raw.lower().partition("x")
    if not sep:
        return None
    try:
        return int(width), int(height)
    except ValueError:
        return None


class LiveEventScheduler:
    """Announce a live event now and remind before it starts.

    One scheduler task per announcement; instances share nothing.

    Args:
        notifier: Destination for both notifications.
        reminder_lead: Seconds before the start time to send the reminder.
        clock: Returns current unix time in seconds.
        sleep: Awaitable sleep, injectable for tests.
    """

    def __init__(
        self,
        notifier: Notifier,
        reminder_lead: int = 30 * 60,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._notifier = notifier
        self._reminder_lead = reminder_lead
        self._clock = clock
        self._sleep = sleep

    async def notify_and_remind(self, event: Event) -> None:
        log = ContextualLogger(_log, live_event=event.id[:12])
        try:
            record = tags_to_live_event(event.tags)
        except LiveEventParseError as exc:
            log.error("Unable to create a live event from the announcement: %s", exc)
            return

        log.info("Sending notification about live event %s", record.id)
        await self._send(event, record, log)

        if record.starts is None:
            return

        delay = record.starts - int(self._clock()) - self._reminder_lead
        if delay <= 0:
            log.info("Live event starts within the reminder window; no reminder scheduled")
            return

        log.debug("Reminder scheduled in %ds", delay)
        await self._sleep(delay)
        log.info("Sending reminder about live event %s", record.id)
        await self._send(event, record, log)

    async def _send(self, event: Event, record: LiveEventRecord, log: ContextualLogger) -> None:
        try:
            notification = live_event_notification(event.id, record, int(self._clock()))
            await self._notifier.send(notification)
        except Exception:
            log.exception("Live event notification failed")
