from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from osmcore.annotate.child import ZERO_TIME
from osmcore.annotate.errors import NoHistoryError, NoVisibleChildError
from osmcore.annotate.options import child_filter, ignore_inconsistency, ignore_missing_children, threshold
from osmcore.annotate.way import ParentWay, annotate_ways
from osmcore.datasource import ElementGroup
from osmcore.feature import ElementType


@dataclass
class Node:
    id: int
    version: int = 0
    visible: bool = True
    timestamp: datetime = ZERO_TIME
    lat: float = 0.0
    lon: float = 0.0
    changeset_id: int = 0
    committed: Optional[datetime] = None
    element_type: ElementType = ElementType.NODE


@dataclass
class WayNode:
    id: int
    version: int = 0
    changeset_id: int = 0
    lat: float = 0.0
    lon: float = 0.0


@dataclass
class Way:
    id: int
    version: int = 0
    visible: bool = True
    timestamp: datetime = ZERO_TIME
    nodes: list = field(default_factory=list)
    changeset_id: int = 0
    committed: Optional[datetime] = None
    updates: list = field(default_factory=list)
    element_type: ElementType = ElementType.WAY


def d(year, month, day):
    return datetime(year, month, day, tzinfo=timezone.utc)


def ds_of(nodes):
    return ElementGroup(nodes=nodes).history_datasource()


def test_child_created_after_parent_one_way():
    nodes = [Node(1, visible=True, version=1, timestamp=d(2012, 2, 1), lat=1, lon=2)]
    ways = [Way(1, version=1, timestamp=d(2012, 1, 1), nodes=[WayNode(1)])]
    annotate_ways(ways, ds_of(nodes), ignore_inconsistency(True))

    node = ways[0].nodes[0]
    assert (node.lat, node.lon) == (0, 0)
    assert len(ways[0].updates) == 1
    update = ways[0].updates[0]
    assert (update.lat, update.lon) == (1, 2)
    assert update.timestamp == nodes[0].timestamp


def test_child_created_between_two_ways():
    nodes = [Node(1, version=1, timestamp=d(2012, 2, 1), lat=1, lon=2)]
    ways = [
        Way(1, version=1, timestamp=d(2012, 1, 1), nodes=[WayNode(1)]),
        Way(1, version=2, timestamp=d(2012, 3, 1), nodes=[WayNode(1)]),
    ]
    annotate_ways(ways, ds_of(nodes), ignore_inconsistency(True))

    node = ways[0].nodes[0]
    assert (node.lat, node.lon) == (0, 0)
    assert len(ways[0].updates) == 1
    assert (ways[0].updates[0].lat, ways[0].updates[0].lon) == (1, 2)
    assert ways[1].updates == []
    node = ways[1].nodes[0]
    assert (node.lat, node.lon) == (1, 2)


def test_two_node_versions_between_two_ways():
    nodes = [
        Node(1, visible=False, version=1, timestamp=d(2012, 2, 1), lat=1, lon=2),
        Node(1, visible=True, version=2, timestamp=d(2012, 4, 1), lat=1, lon=3),
    ]
    ways = [
        Way(1, version=1, timestamp=d(2012, 1, 1), nodes=[WayNode(1)]),
        Way(1, version=2, timestamp=d(2012, 3, 1), nodes=[WayNode(1)]),
    ]
    annotate_ways(ways, ds_of(nodes), ignore_inconsistency(True))

    assert (ways[0].nodes[0].lat, ways[0].nodes[0].lon) == (0, 0)
    assert ways[0].updates == []
    assert (ways[1].nodes[0].lat, ways[1].nodes[0].lon) == (0, 0)
    assert len(ways[1].updates) == 1
    assert ways[1].updates[0].version == 2


def test_node_deleted_between_parents():
    nodes = [
        Node(1, visible=True, version=1, timestamp=d(2012, 1, 1), lat=1, lon=2),
        Node(1, visible=False, version=2, timestamp=d(2012, 2, 1), lat=1, lon=3),
        Node(1, visible=True, version=3, timestamp=d(2012, 3, 1), lat=1, lon=4),
        Node(1, visible=True, version=4, timestamp=d(2013, 1, 1), lat=1, lon=5),
        Node(1, visible=True, version=5, timestamp=d(2013, 2, 1), lat=1, lon=6),
    ]
    ways = [
        Way(1, version=1, timestamp=d(2012, 1, 1), nodes=[WayNode(1)]),
        Way(1, version=2, timestamp=d(2013, 1, 1), nodes=[WayNode(1)]),
    ]
    annotate_ways(ways, ds_of(nodes), ignore_inconsistency(True))

    assert [u.version for u in ways[0].updates] == [3]
    assert [u.version for u in ways[1].updates] == [5]


@pytest.mark.parametrize(
    "node_time, way_times",
    [
        (d(2012, 1, 1), (d(2012, 2, 1), d(2012, 3, 1))),
        (d(2012, 2, 1), (d(2012, 1, 1), d(2012, 3, 1))),
        (d(2012, 3, 1), (d(2012, 1, 1), d(2012, 2, 1))),
    ],
    ids=["before both", "between", "after"],
)
def test_node_redacted(node_time, way_times):
    nodes = [Node(1, visible=False, version=1, timestamp=node_time, lat=1, lon=2)]
    ways = [
        Way(1, version=1, timestamp=way_times[0], nodes=[WayNode(1)]),
        Way(1, version=2, timestamp=way_times[1], nodes=[WayNode(1)]),
    ]
    annotate_ways(ways, ds_of(nodes), ignore_inconsistency(True))

    for way in ways:
        assert (way.nodes[0].lat, way.nodes[0].lon) == (0, 0)


def test_node_redacted_two_nodes():
    nodes = [
        Node(1, visible=False, version=1, timestamp=d(2012, 4, 1), lat=1, lon=2),
        Node(2, visible=True, version=1, timestamp=d(2012, 2, 1), lat=1, lon=2),
    ]
    ways = [
        Way(1, version=1, timestamp=d(2012, 3, 1), nodes=[WayNode(1), WayNode(2)]),
        Way(1, version=1, timestamp=d(2012, 5, 1), nodes=[WayNode(1), WayNode(2)]),
    ]
    annotate_ways(ways, ds_of(nodes), ignore_inconsistency(True))

    for way in ways:
        assert (way.nodes[0].lat, way.nodes[0].lon) == (0, 0)
        assert (way.nodes[1].lat, way.nodes[1].lon) == (1, 2)


def test_child_filter():
    nodes = [
        Node(1, version=1, lat=1, lon=1),
        Node(1, version=2, lat=2, lon=2),
        Node(1, version=3, lat=3, lon=3),
        Node(2, version=1, lat=1, lon=1),
        Node(2, version=2, lat=2, lon=2),
        Node(2, version=3, lat=3, lon=3),
        Node(3, version=1, lat=1, lon=1),
    ]
    ways = [
        Way(1, version=1, nodes=[WayNode(1, version=1), WayNode(2, version=1), WayNode(3)])
    ]
    wanted = ElementType.NODE.feature_id(1)
    annotate_ways(
        ways,
        ds_of(nodes),
        threshold(timedelta(0)),
        child_filter(lambda fid: fid == wanted),
    )

    assert ways[0].nodes[0].lat == 3
    assert ways[0].nodes[1].lat == 0
    assert ways[0].nodes[2].lat == 1


def test_missing_node_history_raises():
    ways = [Way(1, version=1, nodes=[WayNode(99)])]
    with pytest.raises(NoHistoryError) as info:
        annotate_ways(ways, ds_of([]))
    assert info.value.id == ElementType.NODE.feature_id(99)


def test_missing_node_history_ignored():
    ways = [Way(1, version=1, nodes=[WayNode(99)])]
    annotate_ways(ways, ds_of([]), ignore_missing_children(True))
    assert ways[0].nodes[0].version == 0
    assert ways[0].updates == []


def test_invisible_node_raises_without_ignore():
    nodes = [Node(1, visible=False, version=1, timestamp=d(2012, 1, 1))]
    ways = [Way(1, version=1, timestamp=d(2012, 2, 1), nodes=[WayNode(1)])]
    with pytest.raises(NoVisibleChildError) as info:
        annotate_ways(ways, ds_of(nodes))
    assert info.value.id == ElementType.NODE.feature_id(1)


def test_parent_way_refs():
    way = Way(7, version=1, nodes=[WayNode(1, version=2), WayNode(2)])
    ids, annotated = ParentWay(way).refs()
    assert ids == [ElementType.NODE.feature_id(1), ElementType.NODE.feature_id(2)]
    assert annotated == [True, False]
    assert ParentWay(way).id() == ElementType.WAY.feature_id(7)