"""Bullhorn — push notifications for nostr DMs, zaps, comments and live events."""

__version__ = "0.1.2"
