"""Shared pytest fixtures for Bullhorn tests."""

from __future__ import annotations

import pytest

from bullhorn.core.models.config import BullhornConfig
from bullhorn.transport.store import InMemoryEventStore
from tests.helpers.stubs import FRIEND, ME, RecordingNotifier


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def store() -> InMemoryEventStore:
    return InMemoryEventStore()


@pytest.fixture
def config() -> BullhornConfig:
    """Default config watching ``ME`` with ``FRIEND``'s live events."""
    return BullhornConfig(npub=ME, event_npubs=[FRIEND], log_dir="logs")
