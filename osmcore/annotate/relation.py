"""Annotating relations with the versions of their members."""

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
from osmcore.annotate.errors import UnsupportedMemberTypeError, map_errors
from osmcore.annotate.options import DEFAULT_THRESHOLD, build_options
from osmcore.annotate.sources import RelationDatasource
from osmcore.feature import ElementType, FeatureID

_MEMBER_TYPES = (ElementType.NODE, ElementType.WAY, ElementType.RELATION)


def _member_type(value) -> Optional[ElementType]:
    try:
        return ElementType(value)
    except ValueError:
        return None


class ParentRelation(Parent):
    """A relation seen as the parent of its members.

    ``ways`` collects the way versions the members were matched to.
    """

    def __init__(self, relation) -> None:
        self.relation = relation
        self.ways: dict = {}

    def id(self) -> FeatureID:
        return ElementType.RELATION.feature_id(self.relation.id)

    def changeset_id(self) -> int:
        return self.relation.changeset_id

    def version(self) -> int:
        return self.relation.version

    def visible(self) -> bool:
        return self.relation.visible

    def timestamp(self) -> datetime:
        return getattr(self.relation, "timestamp", None) or ZERO_TIME

    def committed(self) -> Optional[datetime]:
        return getattr(self.relation, "committed", None)

    def refs(self) -> tuple[list[FeatureID], list[bool]]:
        ids = []
        annotated = []
        for index, member in enumerate(self.relation.members):
            kind = _member_type(member.type)
            if kind not in _MEMBER_TYPES:
                raise UnsupportedMemberTypeError(kind, self.relation.id, index)
            ids.append(kind.feature_id(member.ref))
            annotated.append(member.version != 0)
        return ids, annotated

    def set_child(self, idx: int, child: Optional[Child]) -> None:
        if child is None:
            return
        member = self.relation.members[idx]
        member.version = child.version
        member.changeset_id = child.changeset_id
        member.lat = child.lat
        member.lon = child.lon
        if child.way is not None:
            self.ways[child.way.id] = child.way


def annotate_relations(relations: list, datasource, *args) -> None:
    """Annotate relation members with version, changeset and location, and set updates.

    The relations, versions of one relation in ascending order, are modified
    in place. The datasource needs node, way and relation histories and
    ``not_found``.
    """
    opts = build_options(args, DEFAULT_THRESHOLD)
    parents = [ParentRelation(r) for r in relations]
    try:
        results = compute(parents, RelationDatasource(datasource), opts)
    except (CoreNoHistoryError, CoreNoVisibleChildError) as err:
        raise map_errors(err) from err

    for relation, updates in zip(relations, results):
        relation.updates = updates