"""Structured projection of a live event announcement's tags."""

from __future__ import annotations

from pydantic import BaseModel, Field


class LiveEventParticipant(BaseModel):
    """A ``p`` tag carrying a live-event role marker."""

    public_key: str
    relay_url: str | None = None


class LiveEventHost(LiveEventParticipant):
    proof: str | None = None


class LiveEventImage(BaseModel):
    url: str
    dimensions: tuple[int, int] | None = None


class LiveEventRecord(BaseModel):
    """Fields of a live event announcement.

    Only ``id`` is required.  Anything not present in the tag set stays
    ``None`` (or empty for the list fields) and is never filled with a
    placeholder.
    """

    id: str = Field(min_length=1, description="Value of the 'd' tag")
    title: str | None = None
    summary: str | None = None
    image: LiveEventImage | None = None
    hashtags: list[str] = Field(default_factory=list)
    streaming: str | None = None
    recording: str | None = None
    starts: int | None = Field(default=None, description="Unix seconds")
    ends: int | None = Field(default=None, description="Unix seconds")
    status: str | None = None
    current_participants: int | None = None
    total_participants: int | None = None
    relays: list[str] = Field(default_factory=list)
    host: LiveEventHost | None = None
    speakers: list[LiveEventParticipant] = Field(default_factory=list)
    participants: list[LiveEventParticipant] = Field(default_factory=list)
