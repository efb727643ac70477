"""Tests for live event tag folding and the LiveEventScheduler."""

import pytest

from bullhorn.core.errors import LiveEventParseError
from bullhorn.core.keys import note_id
from bullhorn.core.live_events import LiveEventScheduler, tags_to_live_event
from bullhorn.core.models.event import Event, EventKind, Tag
from tests.helpers.stubs import RecordingNotifier, make_live_event

HOST = "1" * 64
SPEAKER_A = "2" * 64
SPEAKER_B = "3" * 64
NOW = 1_700_000_000


def _tags(*rows: list[str]) -> list[Tag]:
    return [Tag(values=tuple(r)) for r in rows]


class TestTagsToLiveEvent:
    def test_recognised_fields_preserved(self):
        record = tags_to_live_event(
            _tags(
                ["d", "stream-1"],
                ["title", "X"],
                ["starts", str(NOW)],
                ["p", HOST, "wss://relay.example", "Host", "proof-sig"],
                ["p", SPEAKER_A, "", "Speaker"],
                ["p", SPEAKER_B, "wss://relay.example", "speaker"],
                ["t", "bitcoin"],
            )
        )
        assert record.id == "stream-1"
        assert record.title == "X"
        assert record.starts == NOW
        assert record.host is not None
        assert record.host.public_key == HOST
        assert record.host.relay_url == "wss://relay.example"
        assert record.host.proof == "proof-sig"
        assert [s.public_key for s in record.speakers] == [SPEAKER_A, SPEAKER_B]
        assert record.speakers[0].relay_url is None
        assert record.hashtags == ["bitcoin"]

    def test_absent_tags_stay_unset(self):
        record = tags_to_live_event(_tags(["d", "only-id"]))
        assert record.title is None
        assert record.summary is None
        assert record.streaming is None
        assert record.recording is None
        assert record.starts is None
        assert record.ends is None
        assert record.status is None
        assert record.current_participants is None
        assert record.total_participants is None
        assert record.image is None
        assert record.host is None
        assert record.speakers == []
        assert record.participants == []
        assert record.hashtags == []
        assert record.relays == []

    def test_remaining_fields(self):
        record = tags_to_live_event(
            _tags(
                ["d", "s"],
                ["summary", "weekly call"],
                ["streaming", "https://example.com/live.m3u8"],
                ["recording", "https://example.com/rec.mp4"],
                ["status", "planned"],
                ["ends", str(NOW + 3600)],
                ["current_participants", "12"],
                ["total_participants", "40"],
                ["image", "https://example.com/i.png", "640x480"],
                ["relays", "wss://a", "wss://b"],
                ["relays", "wss://c"],
                ["p", SPEAKER_A, "", "Participant"],
                ["unknown", "ignored"],
            )
        )
        assert record.summary == "weekly call"
        assert record.streaming == "https://example.com/live.m3u8"
        assert record.recording == "https://example.com/rec.mp4"
        assert record.status == "planned"
        assert record.ends == NOW + 3600
        assert record.current_participants == 12
        assert record.total_participants == 40
        assert record.image is not None
        assert record.image.dimensions == (640, 480)
        assert record.relays == ["wss://a", "wss://b", "wss://c"]
        assert [p.public_key for p in record.participants] == [SPEAKER_A]

    def test_last_host_wins(self):
        record = tags_to_live_event(
            _tags(["d", "s"], ["p", HOST, "", "host"], ["p", SPEAKER_A, "", "host"])
        )
        assert record.host.public_key == SPEAKER_A

    def test_unmarked_p_tag_ignored(self):
        record = tags_to_live_event(_tags(["d", "s"], ["p", HOST]))
        assert record.host is None
        assert record.participants == []

    def test_bad_numbers_left_unset(self):
        record = tags_to_live_event(_tags(["d", "s"], ["starts", "soon"]))
        assert record.starts is None

    def test_missing_d_tag(self):
        with pytest.raises(LiveEventParseError):
            tags_to_live_event(_tags(["title", "X"]))

    @pytest.mark.parametrize("row", [["d"], ["d", ""]])
    def test_empty_d_tag(self, row):
        with pytest.raises(LiveEventParseError):
            tags_to_live_event(_tags(row))


class _FakeTime:
    """Clock + sleep pair: sleeping advances the clock."""

    def __init__(self, now: int) -> None:
        self.now = now
        self.sleeps: list[float] = []

    def clock(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += int(seconds)


def _scheduler(notifier, fake: _FakeTime) -> LiveEventScheduler:
    return LiveEventScheduler(notifier, reminder_lead=30 * 60, clock=fake.clock, sleep=fake.sleep)


class TestLiveEventScheduler:
    async def test_notify_now_and_remind_thirty_minutes_before(self, notifier: RecordingNotifier):
        fake = _FakeTime(NOW)
        event = make_live_event([["d", "s"], ["title", "Office hours"], ["starts", str(NOW + 45 * 60)]])

        await _scheduler(notifier, fake).notify_and_remind(event)

        assert fake.sleeps == [15 * 60]
        assert len(notifier.sent) == 2
        assert notifier.sent[0].message == "Office hours starts in 45m"
        assert notifier.sent[1].message == "Office hours starts in 30m"
        assert notifier.sent[0].title == notifier.sent[1].title == "Event announcement"
        assert notifier.sent[0].click == f"nostr:{note_id(event.id)}"
        assert notifier.sent[0].tags == ("spiral_calendar",)

    async def test_no_start_time_means_no_reminder(self, notifier: RecordingNotifier):
        fake = _FakeTime(NOW)
        event = make_live_event([["d", "s"], ["title", "Open mic"]])

        await _scheduler(notifier, fake).notify_and_remind(event)

        assert fake.sleeps == []
        assert [n.message for n in notifier.sent] == ["Open mic has been announced"]

    @pytest.mark.parametrize("starts_in", [10 * 60, 30 * 60, -5 * 60])
    async def test_no_reminder_inside_lead_window(self, notifier, starts_in):
        fake = _FakeTime(NOW)
        event = make_live_event([["d", "s"], ["starts", str(NOW + starts_in)]])

        await _scheduler(notifier, fake).notify_and_remind(event)

        assert fake.sleeps == []
        assert len(notifier.sent) == 1

    async def test_untitled_event_uses_note_id(self, notifier: RecordingNotifier):
        fake = _FakeTime(NOW)
        event = make_live_event([["d", "s"], ["starts", str(NOW - 60)]])

        await _scheduler(notifier, fake).notify_and_remind(event)

        assert notifier.sent[0].message == f"Event {note_id(event.id)} starts in 0s"

    async def test_malformed_announcement_dropped(self, notifier: RecordingNotifier):
        fake = _FakeTime(NOW)
        event = make_live_event([["title", "No id"]])

        await _scheduler(notifier, fake).notify_and_remind(event)

        assert notifier.sent == []

    async def test_delivery_failure_still_schedules_reminder(self):
        failing = RecordingNotifier(fail=True)
        fake = _FakeTime(NOW)
        event = make_live_event([["d", "s"], ["starts", str(NOW + 3600)]])

        await _scheduler(failing, fake).notify_and_remind(event)

        assert fake.sleeps == [30 * 60]

    async def test_unencodable_event_id_logged_not_raised(self, notifier: RecordingNotifier):
        fake = _FakeTime(NOW)
        event = Event.model_construct(
            id="not-hex",
            pubkey="b" * 64,
            created_at=NOW,
            kind=int(EventKind.LIVE_EVENT),
            tags=tuple(_tags(["d", "s"], ["starts", str(NOW + 3600)])),
            content="",
            sig="",
        )

        await _scheduler(notifier, fake).notify_and_remind(event)

        assert notifier.sent == []
        assert fake.sleeps == [30 * 60]
