"""Annotating ways with the versions of their nodes."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from osmcore.annotate.child import ZERO_TIME, Child
from osmcore.annotate.core import (
    CoreNoHistoryError,
    CoreNoVisibleChildError,
    Parent,
    compute,
)
from osmcore.annotate.errors import map_errors
from osmcore.annotate.options import DEFAULT_THRESHOLD, build_options
from osmcore.annotate.sources import WayDatasource
from osmcore.feature import ElementType, FeatureID


class ParentWay(Parent):
    """A way seen as the parent of its nodes."""

    def __init__(self, way) -> None:
        self.way = way

    def id(self) -> FeatureID:
        return ElementType.WAY.feature_id(self.way.id)

    def changeset_id(self) -> int:
        return self.way.changeset_id

    def version(self) -> int:
        return self.way.version

    def visible(self) -> bool:
        return self.way.visible

    def timestamp(self) -> datetime:
        return getattr(self.way, "timestamp", None) or ZERO_TIME

    def committed(self) -> Optional[datetime]:
        return getattr(self.way, "committed", None)

    def refs(self) -> tuple[list[FeatureID], list[bool]]:
        nodes = self.way.nodes
        ids = [ElementType.NODE.feature_id(n.id) for n in nodes]
        annotated = [n.version != 0 for n in nodes]
        return ids, annotated

    def set_child(self, idx: int, child: Optional[Child]) -> None:
        if child is None:
            return
        node = self.way.nodes[idx]
        node.version = child.version
        node.changeset_id = child.changeset_id
        node.lat = child.lat
        node.lon = child.lon


def annotate_ways(ways: list, datasource, *args) -> None:
    """Annotate way nodes with version, changeset and location, and set updates.

    The ways, versions of one way in ascending order, are modified in place.
    The datasource needs ``node_history`` and ``not_found``.
    """
    opts = build_options(args, DEFAULT_THRESHOLD)
    parents = [ParentWay(w) for w in ways]
    try:
        results = compute(parents, WayDatasource(datasource), opts)
    except (CoreNoHistoryError, CoreNoVisibleChildError) as err:
        raise map_errors(err) from err

    for way, updates in zip(ways, results):
        way.updates = updates