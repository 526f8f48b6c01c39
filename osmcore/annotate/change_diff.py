"""Turning a change into a diff with the previous version of each element."""

from __future__ import annotations

from typing import Any, Callable, NamedTuple, Optional

from osmcore.annotate.errors import NoVisibleChildError
from osmcore.annotate.options import build_options
from osmcore.change import Action, ActionType, Change, Diff
from osmcore.datasource import ElementGroup
from osmcore.feature import ElementType


class _Kind(NamedTuple):
    type: ElementType
    attr: str
    history: Callable[[Any, int], list]


_KINDS = (
    _Kind(ElementType.NODE, "nodes", lambda ds, i: ds.node_history(i)),
    _Kind(ElementType.WAY, "ways", lambda ds, i: ds.way_history(i)),
    _Kind(ElementType.RELATION, "relations", lambda ds, i: ds.relation_history(i)),
)


def _wrap(kind: _Kind, element) -> ElementGroup:
    return ElementGroup(**{kind.attr: [element]})


def _find_previous(kind: _Kind, element, datasource, ignore_missing: bool):
    fid = kind.type.feature_id(element.id)
    try:
        history = kind.history(datasource, element.id)
    except Exception as err:
        if not datasource.not_found(err):
            raise
        if ignore_missing:
            return None
        raise NoVisibleChildError(fid) from err

    previous = None
    best = -1
    for candidate in history:
        if best < candidate.version < element.version:
            best = candidate.version
            previous = candidate

    if previous is None and not ignore_missing:
        raise NoVisibleChildError(fid)
    return previous


def _add_updates(
    actions: list,
    group: Optional[ElementGroup],
    action_type: ActionType,
    datasource,
    ignore_missing: bool,
) -> None:
    if group is None:
        return

    current_visible = action_type is not ActionType.DELETE
    for kind in _KINDS:
        for element in getattr(group, kind.attr):
            old = _find_previous(kind, element, datasource, ignore_missing)
            if old is None:
                element.visible = True
                actions.append(Action(type=ActionType.CREATE, osm=_wrap(kind, element)))
                continue

            element.visible = current_visible
            actions.append(
                Action(type=action_type, old=_wrap(kind, old), new=_wrap(kind, element))
            )


def annotate_change(change: Change, datasource, *args) -> Diff:
    """Build a diff from a change, looking up previous versions in the datasource.

    Creates become create actions; modifies and deletes are paired with the
    latest earlier version. With ignore_missing_children, elements without
    an earlier version are reported as creates.
    """
    opts = build_options(args)
    ignore_missing = opts.ignore_missing_children

    actions: list = []
    if change.create is not None:
        for kind in _KINDS:
            for element in getattr(change.create, kind.attr):
                element.visible = True
                actions.append(Action(type=ActionType.CREATE, osm=_wrap(kind, element)))

    _add_updates(actions, change.modify, ActionType.MODIFY, datasource, ignore_missing)
    _add_updates(actions, change.delete, ActionType.DELETE, datasource, ignore_missing)
    return Diff(actions=actions)