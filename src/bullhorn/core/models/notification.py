"""Outbound push notification payload."""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class Priority(IntEnum):
    """ntfy message priorities."""

    MIN = 1
    LOW = 2
    DEFAULT = 3
    HIGH = 4
    MAX = 5


class Notification(BaseModel):
    """A single push notification handed to a :class:`Notifier`."""

    model_config = ConfigDict(frozen=True)

    title: str
    message: str
    priority: Priority = Priority.DEFAULT
    tags: tuple[str, ...] = Field(default=(), description="Emoji short codes, e.g. 'moneybag'")
    click: str | None = Field(default=None, description="Click-through URI")
