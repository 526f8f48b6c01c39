"""Datasources that hand element histories to the matching core as child lists."""

from __future__ import annotations

from typing import Iterable

from osmcore.annotate.child import Child
from osmcore.annotate.core import ChildList, Datasourcer
from osmcore.annotate.errors import UnsupportedMemberTypeError
from osmcore.feature import ElementType, FeatureID


def _by_id_version(element) -> tuple[int, int]:
    return (element.id, element.version)


def nodes_to_child_list(nodes: Iterable) -> ChildList:
    """Node versions as children, sorted by id and version."""
    result = ChildList()
    for index, node in enumerate(sorted(nodes, key=_by_id_version)):
        child = Child.from_node(node)
        child.version_index = index
        result.append(child)
    return result


def ways_to_child_list(ways: Iterable) -> ChildList:
    """Way versions as children, each flagged if it reverses the previous version."""
    ordered = sorted(ways, key=_by_id_version)
    result = ChildList()
    for index, way in enumerate(ordered):
        child = Child.from_way(way)
        child.version_index = index
        if index:
            child.reverse_of_previous = is_reverse(way, ordered[index - 1])
        result.append(child)
    return result


def relations_to_child_list(relations: Iterable) -> ChildList:
    """Relation versions as children, sorted by id and version."""
    result = ChildList()
    for index, relation in enumerate(sorted(relations, key=_by_id_version)):
        child = Child.from_relation(relation)
        child.version_index = index
        result.append(child)
    return result


def _is_ring(way) -> bool:
    return way.nodes[0].id == way.nodes[-1].id


def is_reverse(w1, w2) -> bool:
    """True if one way version runs its endpoints opposite to the other.

    Relation minor updates keep ways connected, so comparing endpoints is
    enough. Closed ways compare unsigned areas, so they are never reported
    as reversed.
    """
    if len(w1.nodes) < 2 or len(w2.nodes) < 2:
        return False
    if _is_ring(w1) or _is_ring(w2):
        return False
    return w1.nodes[0].id == w2.nodes[-1].id and w2.nodes[0].id == w1.nodes[-1].id


class WayDatasource(Datasourcer):
    """Serves node histories for annotating ways.

    If the wrapped datasource has ``node_history_as_children`` it is used
    directly; otherwise ``node_history`` results are converted.
    """

    def __init__(self, datasource) -> None:
        self._ds = datasource

    def get(self, feature_id: int) -> ChildList:
        fid = FeatureID(feature_id)
        if fid.type() is not ElementType.NODE:
            raise ValueError("only node types supported")
        node_id = fid.node_id()
        as_children = getattr(self._ds, "node_history_as_children", None)
        if as_children is not None:
            return ChildList(as_children(node_id))
        return nodes_to_child_list(self._ds.node_history(node_id))

    def not_found(self, err: BaseException) -> bool:
        return self._ds.not_found(err)


class RelationDatasource(Datasourcer):
    """Serves node, way and relation histories for annotating relations.

    ``*_history_as_children`` methods are used when the wrapped datasource
    has them all; otherwise the plain histories are converted.
    """

    _CHILD_METHODS = {
        ElementType.NODE: "node_history_as_children",
        ElementType.WAY: "way_history_as_children",
        ElementType.RELATION: "relation_history_as_children",
    }

    def __init__(self, datasource) -> None:
        self._ds = datasource
        self._as_children = all(
            hasattr(datasource, name) for name in self._CHILD_METHODS.values()
        )

    def get(self, feature_id: int) -> ChildList:
        fid = FeatureID(feature_id)
        kind = fid.type()
        if kind not in self._CHILD_METHODS:
            raise UnsupportedMemberTypeError(kind)

        ref = fid.ref()
        if self._as_children:
            return ChildList(getattr(self._ds, self._CHILD_METHODS[kind])(ref))

        if kind is ElementType.NODE:
            return nodes_to_child_list(self._ds.node_history(ref))
        if kind is ElementType.WAY:
            return ways_to_child_list(self._ds.way_history(ref))
        return relations_to_child_list(self._ds.relation_history(ref))

    def not_found(self, err: BaseException) -> bool:
        return self._ds.not_found(err)