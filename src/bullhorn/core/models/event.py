"""Pydantic models for nostr events and their tags."""

from __future__ import annotations

import json
from enum import IntEnum
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator

_HEX64 = r"^[0-9a-f]{64}$"


class EventKind(IntEnum):
    """Event kinds the notifier cares about.  Everything else is "other"."""

    TEXT_NOTE = 1
    ENCRYPTED_DIRECT_MESSAGE = 4
    ZAP_RECEIPT = 9735
    LIVE_EVENT = 30311


class Tag(BaseModel):
    """A single positional tag, e.g. ``["e", "<id>", "<relay>"]``."""

    model_config = ConfigDict(frozen=True)

    values: tuple[str, ...] = Field(min_length=1)

    @property
    def kind(self) -> str:
        return self.values[0]

    @property
    def content(self) -> str | None:
        """Second element of the tag, or ``None`` when absent."""
        return self.values[1] if len(self.values) > 1 else None

    def get(self, index: int) -> str | None:
        return self.values[index] if len(self.values) > index else None

    def embedded_event(self) -> Event | None:
        """Parse the tag content as a JSON-encoded event (``description`` tags)."""
        if self.content is None:
            return None
        try:
            return Event.from_json(self.content)
        except ValueError:
            return None


class Event(BaseModel):
    """Immutable nostr event as delivered by the transport.

    Signatures are assumed verified upstream; ``sig`` is carried but never
    checked here.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(pattern=_HEX64)
    pubkey: str = Field(pattern=_HEX64)
    created_at: int
    kind: int
    tags: tuple[Tag, ...] = ()
    content: str = ""
    sig: str = ""

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return tuple(
                Tag(values=tuple(t)) if isinstance(t, (list, tuple)) else t for t in value
            )
        return value

    @classmethod
    def from_json(cls, raw: str | bytes) -> Event:
        """Build an event from its protocol JSON object form.

        Raises:
            ValueError: If *raw* is not a JSON object describing an event.
        """
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("event JSON must be an object")
        return cls.model_validate(data)

    def as_json(self) -> str:
        data = self.model_dump()
        data["tags"] = [list(t.values) for t in self.tags]
        return json.dumps(data, separators=(",", ":"))

    @property
    def event_kind(self) -> EventKind | None:
        """The known :class:`EventKind`, or ``None`` for any other kind."""
        try:
            return EventKind(self.kind)
        except ValueError:
            return None

    def tags_of(self, kind: str) -> Iterator[Tag]:
        return (t for t in self.tags if t.kind == kind)

    def find_tag(self, kind: str) -> Tag | None:
        return next(self.tags_of(kind), None)

    def event_ids(self) -> Iterator[str]:
        """Referenced event ids (``e`` tags) in tag order."""
        return (t.content for t in self.tags_of("e") if t.content)

    def public_keys(self) -> Iterator[str]:
        """Tagged public keys (``p`` tags) in tag order."""
        return (t.content for t in self.tags_of("p") if t.content)
