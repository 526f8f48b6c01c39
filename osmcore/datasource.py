"""In-memory element collections and history lookups keyed by element id."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from osmcore.feature import ElementType


class NotFoundError(LookupError):
    """Raised when a feature has no history in the datasource."""

    def __init__(self, message: str = "osm: feature not found") -> None:
        super().__init__(message)


@dataclass
class ElementGroup:
    """A set of nodes, ways and relations."""

    nodes: list = field(default_factory=list)
    ways: list = field(default_factory=list)
    relations: list = field(default_factory=list)

    def append(self, element) -> None:
        """Add an element to the list matching its element_type."""
        kind = element.element_type
        if kind is ElementType.NODE:
            self.nodes.append(element)
        elif kind is ElementType.WAY:
            self.ways.append(element)
        elif kind is ElementType.RELATION:
            self.relations.append(element)
        else:
            raise TypeError(f"unsupported element type: {kind}")

    def history_datasource(self) -> "HistoryDatasource":
        """A datasource holding every element of this group by id."""
        ds = HistoryDatasource()
        ds.add(self)
        return ds


@dataclass
class HistoryDatasource:
    """Element histories keyed by id, for nodes, ways and relations."""

    nodes: dict = field(default_factory=dict)
    ways: dict = field(default_factory=dict)
    relations: dict = field(default_factory=dict)

    def add(self, group: Optional[ElementGroup], visible: Optional[bool] = None) -> None:
        """Append the group's elements; if visible is given, set it on each."""
        if group is None:
            return
        for elements, target in (
            (group.nodes, self.nodes),
            (group.ways, self.ways),
            (group.relations, self.relations),
        ):
            for element in elements:
                if visible is not None:
                    element.visible = visible
                target.setdefault(element.id, []).append(element)

    @staticmethod
    def _lookup(table: dict, key: int) -> list:
        history = table.get(key)
        if history is None:
            raise NotFoundError()
        return history

    def node_history(self, node_id: int) -> list:
        return self._lookup(self.nodes, node_id)

    def way_history(self, way_id: int) -> list:
        return self._lookup(self.ways, way_id)

    def relation_history(self, relation_id: int) -> list:
        return self._lookup(self.relations, relation_id)

    def not_found(self, err: BaseException) -> bool:
        """True if err is the datasource's not-found error."""
        return isinstance(err, NotFoundError)