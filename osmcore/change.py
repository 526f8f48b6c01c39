"""Change sets of created, modified and deleted elements, and diffs built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from osmcore.datasource import ElementGroup, HistoryDatasource


@dataclass
class Change:
    """The elements created, modified and deleted by one upload or download."""

    version: float = 0.0
    generator: str = ""
    copyright: str = ""
    attribution: str = ""
    license: str = ""

    create: Optional[ElementGroup] = None
    modify: Optional[ElementGroup] = None
    delete: Optional[ElementGroup] = None

    def append_create(self, element) -> None:
        """Add the element to the created elements."""
        if self.create is None:
            self.create = ElementGroup()
        self.create.append(element)

    def append_modify(self, element) -> None:
        """Add the element to the modified elements."""
        if self.modify is None:
            self.modify = ElementGroup()
        self.modify.append(element)

    def append_delete(self, element) -> None:
        """Add the element to the deleted elements."""
        if self.delete is None:
            self.delete = ElementGroup()
        self.delete.append(element)

    def history_datasource(self) -> HistoryDatasource:
        """A datasource of all elements: creates and modifies visible, deletes not."""
        ds = HistoryDatasource()
        ds.add(self.create, True)
        ds.add(self.modify, True)
        ds.add(self.delete, False)
        return ds


class ActionType(str, Enum):
    """The kinds of diff action."""

    CREATE = "create"
    MODIFY = "modify"
    DELETE = "delete"

    def __str__(self) -> str:
        return self.value


@dataclass
class Action:
    """A create, modify or delete action.

    A create holds the new element in ``osm``; a modify or delete holds
    the previous element in ``old`` and the new one in ``new``.
    """

    type: ActionType
    osm: Optional[ElementGroup] = None
    old: Optional[ElementGroup] = None
    new: Optional[ElementGroup] = None

    @property
    def nodes(self) -> list:
        return self.osm.nodes if self.osm is not None else []

    @property
    def ways(self) -> list:
        return self.osm.ways if self.osm is not None else []

    @property
    def relations(self) -> list:
        return self.osm.relations if self.osm is not None else []


@dataclass
class Diff:
    """A list of actions, with the changesets they belong to."""

    actions: list = field(default_factory=list)
    changesets: list = field(default_factory=list)