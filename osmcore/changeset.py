"""Changesets: metadata around a set of OSM changes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from osmcore.bounds import Bounds
from osmcore.change import Change


@dataclass
class ChangesetComment:
    """One comment in a changeset discussion."""

    user: str = ""
    user_id: int = 0
    timestamp: Optional[datetime] = None
    text: str = ""


@dataclass
class ChangesetDiscussion:
    """The conversation about a changeset."""

    comments: list = field(default_factory=list)


@dataclass
class Changeset:
    """A set of metadata around a set of OSM changes."""

    id: int = 0
    user: str = ""
    user_id: int = 0
    created_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    open: bool = False
    changes_count: int = 0
    min_lat: float = 0.0
    max_lat: float = 0.0
    min_lon: float = 0.0
    max_lon: float = 0.0
    comments_count: int = 0
    tags: dict = field(default_factory=dict)
    discussion: Optional[ChangesetDiscussion] = None
    change: Optional[Change] = None

    def bounds(self) -> Bounds:
        """The changeset's extent as a Bounds."""
        return Bounds(
            min_lat=self.min_lat,
            max_lat=self.max_lat,
            min_lon=self.min_lon,
            max_lon=self.max_lon,
        )

    def _tag(self, key: str) -> str:
        return self.tags.get(key, "")

    def comment(self) -> str:
        return self._tag("comment")

    def created_by(self) -> str:
        return self._tag("created_by")

    def locale(self) -> str:
        return self._tag("locale")

    def host(self) -> str:
        return self._tag("host")

    def imagery_used(self) -> str:
        return self._tag("imagery_used")

    def source(self) -> str:
        return self._tag("source")

    def bot(self) -> bool:
        """True if the bot tag is exactly "yes"."""
        return self._tag("bot") == "yes"


def changeset_ids(changesets: Iterable[Changeset]) -> list[int]:
    """The ids of the changesets, in order."""
    return [c.id for c in changesets]