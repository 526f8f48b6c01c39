"""Child-before-parent ordering of relations."""

from __future__ import annotations

from typing import Iterable, Iterator

from osmcore.feature import ElementType


class OrderingCancelled(Exception):
    """Raised when iterating an ordering after it was closed."""


class ChildFirstOrdering:
    """Yields relation ids so that member relations come before their parents.

    Relations must be inserted and annotated in this order, since relations
    may reference other relations. Circular references are allowed and are
    cut where they close. The ordering can be iterated once.

    ``completed_index`` is the index in ``ids`` of the last id whose whole
    tree has been yielded, a good position to restart from.
    """

    def __init__(self, ids: Iterable[int], datasource) -> None:
        self.completed_index = 0
        self._ids = list(ids)
        self._ds = datasource
        self._visited: set[int] = set()
        self._closed = False
        self._results = self._generate()

    def __iter__(self) -> Iterator[int]:
        return self._results

    def close(self) -> None:
        """Stop the walk; further iteration raises OrderingCancelled."""
        self._closed = True

    def _check_open(self) -> None:
        if self._closed:
            raise OrderingCancelled("ordering closed")

    def _generate(self) -> Iterator[int]:
        self._check_open()
        for index, relation_id in enumerate(self._ids):
            for found in self._walk(relation_id, ()):
                self._check_open()
                yield found
                self._check_open()
            self.completed_index = index

    def _walk(self, relation_id: int, path: tuple) -> Iterator[int]:
        if relation_id in self._visited:
            return

        try:
            relations = self._ds.relation_history(relation_id)
        except Exception as err:
            if self._ds.not_found(err):
                return
            raise

        for relation in relations:
            for member in relation.members:
                if member.type != ElementType.RELATION:
                    continue
                member_id = member.ref
                if member_id in path:
                    # Already being walked higher up the stack.
                    return
                yield from self._walk(member_id, path + (member_id,))

        self._visited.add(relation_id)
        yield relation_id