"""Subscription filter descriptor."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from bullhorn.core.models.event import Event


class Filter(BaseModel):
    """Conjunction of kinds, actor constraints and a lower-bound timestamp.

    ``authors`` restricts who published the event; ``pubkeys`` restricts who
    is tagged in it (``#p``).  ``None`` means "no constraint"; an empty tuple
    matches nothing.
    """

    model_config = ConfigDict(frozen=True)

    kinds: tuple[int, ...] = ()
    authors: tuple[str, ...] | None = None
    pubkeys: tuple[str, ...] | None = None
    since: int | None = Field(default=None, description="Unix seconds, inclusive")

    def to_wire(self) -> dict[str, object]:
        """Render as the protocol's ``REQ`` filter object."""
        wire: dict[str, object] = {}
        if self.kinds:
            wire["kinds"] = list(self.kinds)
        if self.authors is not None:
            wire["authors"] = list(self.authors)
        if self.pubkeys is not None:
            wire["#p"] = list(self.pubkeys)
        if self.since is not None:
            wire["since"] = self.since
        return wire

    def matches(self, event: Event) -> bool:
        """Return ``True`` if *event* satisfies every constraint."""
        if self.kinds and event.kind not in self.kinds:
            return False
        if self.authors is not None and event.pubkey not in self.authors:
            return False
        if self.pubkeys is not None and not any(p in self.pubkeys for p in event.public_keys()):
            return False
        if self.since is not None and event.created_at < self.since:
            return False
        return True
