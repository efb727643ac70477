"""Tests for subscription topic persistence and QR rendering."""

import uuid

import pytest

from bullhorn.config.topic import display_subscription_qr, get_subscription_topic, render_qr


class TestSubscriptionTopic:
    def test_created_then_reused(self, tmp_path):
        directory = tmp_path / "bullhorn"
        first = get_subscription_topic(directory)
        assert uuid.UUID(first).version == 4
        assert (directory / "topic").read_text() == first
        assert get_subscription_topic(directory) == first

    def test_invalid_topic_file(self, tmp_path):
        (tmp_path / "topic").write_text("not-a-uuid")
        with pytest.raises(ValueError):
            get_subscription_topic(tmp_path)


class TestQr:
    def test_render_is_multiline(self):
        art = render_qr("0b7a4a5c-7d0e-4d8a-9a1e-3d2f1c0b9e8f")
        assert len(art.splitlines()) > 10

    def test_display_prints_topic(self, capsys):
        topic = "0b7a4a5c-7d0e-4d8a-9a1e-3d2f1c0b9e8f"
        display_subscription_qr(topic)
        out = capsys.readouterr().out
        assert topic in out
        assert "ntfy" in out
