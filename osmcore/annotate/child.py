"""Children (nodes, ways, relations) that parents are annotated with, and their updates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from osmcore.feature import ElementType, FeatureID

# The earliest time for which OSM keeps reliable commit information.
COMMIT_INFO_START = datetime(2012, 9, 12, 6, 55, 0, tzinfo=timezone.utc)

# Stand-in for an unknown time.
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


def is_zero_time(t: Optional[datetime]) -> bool:
    """True if the time is unknown."""
    return t is None or t == ZERO_TIME


def before_commit_info(t: Optional[datetime]) -> bool:
    """True if the time is unknown or before COMMIT_INFO_START."""
    return t is None or t < COMMIT_INFO_START


@dataclass
class Update:
    """A minor change to a child between two versions of its parent."""

    index: int = 0
    version: int = 0
    timestamp: datetime = ZERO_TIME
    changeset_id: int = 0
    lat: float = 0.0
    lon: float = 0.0
    reverse: bool = False


def _update_timestamp(timestamp: datetime, committed: Optional[datetime]) -> datetime:
    if timestamp < COMMIT_INFO_START or is_zero_time(committed):
        return timestamp
    return committed


@dataclass(eq=False)
class Child:
    """A node, way or relation that a way or relation depends on."""

    id: FeatureID = FeatureID(0)
    version: int = 0
    changeset_id: int = 0
    # Position of this version when the history is sorted ascending;
    # versions need not start at 1 or be sequential.
    version_index: int = 0
    visible: bool = False
    timestamp: datetime = ZERO_TIME
    committed: Optional[datetime] = ZERO_TIME
    lon: float = 0.0
    lat: float = 0.0
    way: Any = field(default=None, repr=False)
    reverse_of_previous: bool = False

    def update(self) -> Update:
        """The update describing this child version."""
        return Update(
            version=self.version,
            timestamp=_update_timestamp(self.timestamp, self.committed),
            changeset_id=self.changeset_id,
            lat=self.lat,
            lon=self.lon,
            reverse=self.reverse_of_previous,
        )

    @classmethod
    def _from_element(cls, kind: ElementType, element, **extra) -> "Child":
        return cls(
            id=kind.feature_id(element.id),
            version=element.version,
            changeset_id=element.changeset_id,
            visible=element.visible,
            timestamp=getattr(element, "timestamp", None) or ZERO_TIME,
            committed=getattr(element, "committed", None) or ZERO_TIME,
            **extra,
        )

    @classmethod
    def from_node(cls, node) -> "Child":
        """A child carrying the node's location."""
        return cls._from_element(ElementType.NODE, node, lon=node.lon, lat=node.lat)

    @classmethod
    def from_way(cls, way) -> "Child":
        """A child holding a reference to the way."""
        return cls._from_element(ElementType.WAY, way, way=way)

    @classmethod
    def from_relation(cls, relation) -> "Child":
        return cls._from_element(ElementType.RELATION, relation)