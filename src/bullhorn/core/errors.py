"""Exception types raised inside the notification core."""

from __future__ import annotations


class NotificationDeliveryError(RuntimeError):
    """A push notification could not be delivered."""


class LiveEventParseError(ValueError):
    """A live event announcement lacks a usable ``d`` identifier tag."""
