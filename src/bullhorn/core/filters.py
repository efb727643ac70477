"""Subscription filters needed to see everything we notify on."""

from __future__ import annotations

import time

from bullhorn.core.models.event import EventKind
from bullhorn.core.models.filter import Filter

_HOUR = 60 * 60


def pubkey_receives_filters(
    pubkey: str,
    event_npubs: list[str],
    *,
    now: int | None = None,
    note_lookback_hours: int = 48,
    live_event_lookback_hours: int = 24,
) -> list[Filter]:
    """Build the four filters for *pubkey*.

    1. DMs and zap receipts addressed to us, from now on.
    2. Notes we wrote in the lookback window.  These are never notified;
       they populate the local store so replies can be validated.
    3. Notes that tag us, from now on (reduced to direct replies later).
    4. Live events from *event_npubs* in the live-event lookback window.
    """
    if now is None:
        now = int(time.time())
    return [
        Filter(
            kinds=(EventKind.ENCRYPTED_DIRECT_MESSAGE, EventKind.ZAP_RECEIPT),
            pubkeys=(pubkey,),
            since=now,
        ),
        Filter(
            kinds=(EventKind.TEXT_NOTE,),
            authors=(pubkey,),
            since=now - note_lookback_hours * _HOUR,
        ),
        Filter(
            kinds=(EventKind.TEXT_NOTE,),
            pubkeys=(pubkey,),
            since=now,
        ),
        Filter(
            kinds=(EventKind.LIVE_EVENT,),
            authors=tuple(event_npubs),
            since=now - live_event_lookback_hours * _HOUR,
        ),
    ]
