"""Stub collaborators and event factories shared by the tests."""

from __future__ import annotations

import asyncio
import time
import uuid

from bullhorn.core.errors import NotificationDeliveryError
from bullhorn.core.interfaces.transport import EventLookup, Notifier
from bullhorn.core.models.event import Event, EventKind
from bullhorn.core.models.notification import Notification

ME = "a" * 64
FRIEND = "b" * 64
STRANGER = "c" * 64


def new_id() -> str:
    return uuid.uuid4().hex + uuid.uuid4().hex


def make_event(
    kind: int,
    pubkey: str = STRANGER,
    tags: list[list[str]] | None = None,
    content: str = "",
    event_id: str | None = None,
    created_at: int | None = None,
) -> Event:
    return Event(
        id=event_id or new_id(),
        pubkey=pubkey,
        created_at=int(time.time()) if created_at is None else created_at,
        kind=kind,
        tags=tags or [],
        content=content,
    )


def make_zap_receipt(amount_msats: int | str, recipient: str = ME) -> Event:
    request = make_event(
        9734, pubkey=STRANGER, tags=[["p", recipient], ["amount", str(amount_msats)]]
    )
    return make_event(
        EventKind.ZAP_RECEIPT,
        pubkey="d" * 64,
        tags=[["p", recipient], ["description", request.as_json()]],
    )


def make_live_event(tags: list[list[str]], pubkey: str = FRIEND) -> Event:
    return make_event(EventKind.LIVE_EVENT, pubkey=pubkey, tags=tags)


class RecordingNotifier(Notifier):
    """Records each notification with the loop time it was sent at."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: list[Notification] = []
        self.sent_at: list[float] = []
        self.fail = fail

    async def send(self, notification: Notification) -> None:
        if self.fail:
            raise NotificationDeliveryError("HTTP 500 Internal Server Error")
        self.sent.append(notification)
        self.sent_at.append(asyncio.get_running_loop().time())

    def titles(self) -> list[str]:
        return [n.title for n in self.sent]


class DictLookup(EventLookup):
    def __init__(self, *events: Event) -> None:
        self.events = {e.id: e for e in events}

    async def get_event(self, event_id: str) -> Event | None:
        return self.events.get(event_id)


class FailingLookup(EventLookup):
    async def get_event(self, event_id: str) -> Event | None:
        raise OSError("database unavailable")
