from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from osmcore.annotate.child import (
    COMMIT_INFO_START,
    ZERO_TIME,
    Child,
    Update,
    before_commit_info,
    is_zero_time,
)
from osmcore.feature import ElementType


@dataclass
class FakeElement:
    id: int = 0
    version: int = 0
    changeset_id: int = 0
    visible: bool = False
    timestamp: datetime = ZERO_TIME
    committed: Optional[datetime] = None
    lat: float = 0.0
    lon: float = 0.0
    nodes: list = field(default_factory=list)


def test_from_node_copies_fields():
    ts = datetime(2016, 1, 1, tzinfo=timezone.utc)
    node = FakeElement(id=5, version=3, changeset_id=7, visible=True, timestamp=ts, lat=1.5, lon=2.5)
    child = Child.from_node(node)
    assert child.id == ElementType.NODE.feature_id(5)
    assert child.version == 3
    assert child.changeset_id == 7
    assert child.visible is True
    assert child.timestamp == ts
    assert (child.lat, child.lon) == (1.5, 2.5)
    assert is_zero_time(child.committed)


def test_from_way_keeps_way_reference():
    way = FakeElement(id=9, version=2, visible=True)
    child = Child.from_way(way)
    assert child.way is way
    assert child.id == ElementType.WAY.feature_id(9)
    assert child.id.type() is ElementType.WAY


def test_from_relation_uses_relation_type():
    rel = FakeElement(id=4, version=1)
    child = Child.from_relation(rel)
    assert child.id == ElementType.RELATION.feature_id(4)
    assert child.way is None


def test_update_uses_timestamp_without_commit():
    ts = COMMIT_INFO_START + timedelta(days=10)
    child = Child(version=2, changeset_id=3, timestamp=ts, lat=1.0, lon=2.0, reverse_of_previous=True)
    assert child.update() == Update(
        index=0, version=2, timestamp=ts, changeset_id=3, lat=1.0, lon=2.0, reverse=True
    )


def test_update_uses_committed_after_commit_start():
    ts = COMMIT_INFO_START + timedelta(days=1)
    committed = ts + timedelta(hours=2)
    child = Child(timestamp=ts, committed=committed)
    assert child.update().timestamp == committed


def test_update_ignores_committed_for_old_timestamps():
    ts = COMMIT_INFO_START - timedelta(days=1)
    committed = COMMIT_INFO_START + timedelta(days=1)
    child = Child(timestamp=ts, committed=committed)
    assert child.update().timestamp == ts


def test_before_commit_info():
    assert before_commit_info(None)
    assert before_commit_info(ZERO_TIME)
    assert not before_commit_info(COMMIT_INFO_START)