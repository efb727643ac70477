"""Builders for the notification payloads Bullhorn sends."""

from __future__ import annotations

from bullhorn.core.keys import note_id
from bullhorn.core.models.live_event import LiveEventRecord
from bullhorn.core.models.notification import Notification, Priority

DM_TITLE = "New DM Received"
ZAPS_TITLE = "Zaps Received"
COMMENT_TITLE = "Comment Received"
EVENT_TITLE = "Event announcement"

MSATS_PER_SAT = 1_000


def format_duration(seconds: int) -> str:
    """Format *seconds* as ``1d 2h 3m 4s``, omitting zero parts.

    Negative input is clamped to zero, which formats as ``0s``.
    """
    seconds = max(0, int(seconds))
    days, rem = divmod(seconds, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)
    parts = [
        f"{value}{unit}"
        for value, unit in ((days, "d"), (hours, "h"), (minutes, "m"), (secs, "s"))
        if value
    ]
    return " ".join(parts) or "0s"


def dm_notification() -> Notification:
    return Notification(
        title=DM_TITLE,
        message="You've received a new nostr DM.",
        priority=Priority.DEFAULT,
        tags=("book",),
    )


def zap_notification(amount_msats: int) -> Notification:
    # Whole sats only; the millisat remainder is dropped.
    amount = amount_msats // MSATS_PER_SAT
    return Notification(
        title=ZAPS_TITLE,
        message=f"You've received {amount} sats in zaps on your post!",
        priority=Priority.DEFAULT,
        tags=("moneybag",),
    )


def comment_notification(event_id: str) -> Notification:
    return Notification(
        title=COMMENT_TITLE,
        message="You've received a comment on your post!",
        priority=Priority.DEFAULT,
        tags=("incoming_envelope",),
        click=f"nostr:{note_id(event_id)}",
    )


def live_event_notification(event_id: str, record: LiveEventRecord, now: int) -> Notification:
    """Announcement (or reminder) for a live event.

    Args:
        event_id: Id of the announcing event, used for the click URI.
        record: Parsed live event.
        now: Current unix time, for the time-to-start.
    """
    bech = note_id(event_id)
    title = record.title or f"Event {bech}"
    if record.starts is not None:
        message = f"{title} starts in {format_duration(record.starts - now)}"
    else:
        message = f"{title} has been announced"
    return Notification(
        title=EVENT_TITLE,
        message=message,
        priority=Priority.DEFAULT,
        tags=("spiral_calendar",),
        click=f"nostr:{bech}",
    )
