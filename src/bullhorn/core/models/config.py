"""Configuration Pydantic model: BullhornConfig."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bullhorn.core.keys import normalize_public_key

class BullhornConfig(BaseModel):
    """Top-level configuration loaded from ``config.json``.

    Public keys may be given as ``npub1…`` or 64-char hex; they are stored
    as lowercase hex.
    """

    model_config = ConfigDict(extra="forbid")

    npub: str = Field(description="Identity to watch")
    event_npubs: list[str] = Field(
        default_factory=list, description="Identities whose live events we announce"
    )
    ntfy_server: str = Field(default="https://ntfy.sh", description="ntfy base URL")

    zap_debounce_seconds: float = Field(default=120, gt=0, description="Zap quiet period")
    reminder_lead_seconds: int = Field(
        default=30 * 60, ge=0, description="How long before a live event starts to remind"
    )
    note_lookback_hours: int = Field(default=48, ge=0)
    live_event_lookback_hours: int = Field(default=24, ge=0)

    event_channel_size: int = Field(default=300, gt=0, description="Accepted-event queue size")
    zap_channel_size: int = Field(default=100, gt=0, description="Zap amount queue size")

    log_level: str = Field(default="INFO", description="Root log level")
    log_dir: str = Field(default="logs", description="Directory for rotating log files")

    @field_validator("npub")
    @classmethod
    def _normalize_npub(cls, value: str) -> str:
        return normalize_public_key(value)

    @field_validator("event_npubs")
    @classmethod
    def _normalize_event_npubs(cls, value: list[str]) -> list[str]:
        return [normalize_public_key(v) for v in value]
