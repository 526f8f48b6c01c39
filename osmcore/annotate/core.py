"""Matching of child versions to parent versions and computation of minor updates."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, Optional

from osmcore.annotate.child import Child, Update, before_commit_info
from osmcore.feature import FeatureID

_NO_TIME = timedelta(0)
_MIN_TIME = datetime.min.replace(tzinfo=timezone.utc)
_MAX_TIME = datetime.max.replace(tzinfo=timezone.utc)


class CoreNoHistoryError(LookupError):
    """No history exists for a child."""

    def __init__(self, child_id: FeatureID) -> None:
        self.child_id = child_id
        super().__init__(f"element history not found for {child_id}")


class CoreNoVisibleChildError(LookupError):
    """No child version is visible for a parent at the given time."""

    def __init__(self, child_id: FeatureID, timestamp: Optional[datetime]) -> None:
        self.child_id = child_id
        self.timestamp = timestamp
        super().__init__(f"no visible child for {child_id} at {timestamp}")


@dataclass
class Options:
    """Parameters of the matching process."""

    threshold: timedelta = _NO_TIME
    ignore_inconsistency: bool = False
    ignore_missing_children: bool = False
    child_filter: Optional[Callable[[FeatureID], bool]] = None


@dataclass(frozen=True)
class ChildLoc:
    """Where a child sits: the parent's position and the index within it."""

    parent: int
    index: int


class Parent(ABC):
    """Something holding children: ways hold nodes, relations hold any element."""

    @abstractmethod
    def id(self) -> FeatureID: ...

    @abstractmethod
    def changeset_id(self) -> int: ...

    @abstractmethod
    def version(self) -> int: ...

    @abstractmethod
    def visible(self) -> bool: ...

    @abstractmethod
    def timestamp(self) -> datetime: ...

    @abstractmethod
    def committed(self) -> Optional[datetime]: ...

    @abstractmethod
    def refs(self) -> tuple[list[FeatureID], list[bool]]:
        """The children's feature ids and whether each is already annotated."""

    @abstractmethod
    def set_child(self, idx: int, child: Optional[Child]) -> None: ...


class Datasourcer(ABC):
    """Fetches the history of a child as a ChildList."""

    @abstractmethod
    def get(self, feature_id: FeatureID) -> "ChildList": ...

    @abstractmethod
    def not_found(self, err: BaseException) -> bool: ...


def _shift(t: datetime, delta: timedelta) -> datetime:
    try:
        return t + delta
    except OverflowError:
        return _MIN_TIME if delta < _NO_TIME else _MAX_TIME


def _child_time(c: Child) -> datetime:
    if before_commit_info(c.committed):
        return c.timestamp
    return c.committed


def _parent_time(p: Parent) -> datetime:
    committed = p.committed()
    if before_commit_info(committed):
        return p.timestamp()
    return committed


class ChildList(list):
    """The versions of one child, sorted from lowest to highest."""

    def find_visible(self, changeset_id: int, at: datetime, eps: timedelta) -> Optional[Child]:
        """The child visible at the given time, or None.

        For data committed on or after COMMIT_INFO_START the committed time
        decides. For earlier data the closest visible version within +-eps
        of ``at`` wins, or else the previous version if visible; versions
        after ``at`` must share the parent's changeset.
        """
        diff: Optional[timedelta] = None
        nearest: Optional[Child] = None

        for c in self:
            if before_commit_info(c.committed):
                offset = (c.timestamp - at) + eps
                if offset > 2 * eps:
                    break

                if offset < _NO_TIME:
                    nearest = c if c.visible else None
                    continue

                d = abs(offset - eps)
                if diff is None or d <= diff:
                    if diff is None and not c.visible and offset == _NO_TIME:
                        nearest = None

                    if c.visible:
                        if offset <= eps or c.changeset_id == changeset_id:
                            nearest = c
                        else:
                            continue

                    diff = d
            else:
                if c.committed > at:
                    break
                nearest = c if c.visible else None

        return nearest

    def version_before(self, end: datetime) -> Optional[Child]:
        """The last version whose time is strictly before ``end``."""
        latest = None
        for c in self:
            if not _child_time(c) < end:
                break
            latest = c
        return latest


def group_by_parent(locs: list[ChildLoc]) -> list[list[ChildLoc]]:
    """Split consecutive runs of locations that share a parent."""
    groups: list[list[ChildLoc]] = []
    for loc in locs:
        if groups and groups[-1][0].parent == loc.parent:
            groups[-1].append(loc)
        else:
            groups.append([loc])
    return groups


def _map_child_locs(
    parents: list[Parent], child_filter: Optional[Callable[[FeatureID], bool]]
) -> dict[FeatureID, list[ChildLoc]]:
    result: dict[FeatureID, list[ChildLoc]] = {}
    for i, parent in enumerate(parents):
        ids, annotated = parent.refs()
        for j, (fid, done) in enumerate(zip(ids, annotated)):
            if done and child_filter is not None and not child_filter(fid):
                continue
            result.setdefault(fid, []).append(ChildLoc(parent=i, index=j))
    return result


def _next_version_index(
    current: Optional[Child],
    history: ChildList,
    next_parent: Optional[Parent],
    opts: Options,
) -> int:
    if next_parent is None:
        # No later parent version: every later child version applies.
        return history[-1].version_index + 1

    next_time = _parent_time(next_parent)
    ts = _shift(next_time, -opts.threshold)
    nxt = history.find_visible(next_parent.changeset_id(), next_time, opts.threshold)

    if nxt is not None:
        # Updated well enough before the next parent: count it as a minor version.
        if _child_time(nxt) < ts:
            return nxt.version_index + 1
        return nxt.version_index

    # Missing from the next parent, the next parent is deleted, or the data
    # is inconsistent: use the last version one threshold before the next parent.
    if current is not None and not ts > _child_time(current):
        return 0

    nxt = history.version_before(ts)
    if nxt is None:
        return 0
    return nxt.version_index + 1


def compute(
    parents: list[Parent],
    histories: Datasourcer,
    options: Optional[Options] = None,
) -> list[list[Update]]:
    """Set each parent's children to the matching versions and return its updates.

    The result holds one list of updates per parent, sorted by child index.
    """
    opts = options if options is not None else Options()
    results: list[list[Update]] = [[] for _ in parents]

    for fid, locations in _map_child_locs(parents, opts.child_filter).items():
        try:
            history = histories.get(fid)
        except Exception as err:
            if not histories.not_found(err):
                raise
            if opts.ignore_missing_children:
                continue
            raise CoreNoHistoryError(fid) from err

        for locs in group_by_parent(locations):
            parent_index = locs[0].parent
            parent = parents[parent_index]
            if not parent.visible():
                continue

            next_parent = parents[parent_index + 1] if parent_index < len(parents) - 1 else None
            at = _parent_time(parent)

            current = history.find_visible(parent.changeset_id(), at, opts.threshold)
            if current is None and not opts.ignore_inconsistency:
                raise CoreNoVisibleChildError(fid, at)

            for loc in locs:
                parent.set_child(loc.index, current)

            next_version = _next_version_index(current, history, next_parent, opts)

            if current is not None:
                start = current.version_index + 1
            else:
                previous = history.version_before(at)
                start = 0 if previous is None else previous.version_index + 1

            for version in history[start:next_version]:
                if version.visible:
                    # The child may appear at several positions in the parent.
                    for loc in locs:
                        update = version.update()
                        update.index = loc.index
                        results[parent_index].append(update)
                elif not opts.ignore_inconsistency:
                    # Deleted between parent versions; happens in old data.
                    raise ValueError(
                        f"{parent.id()}: {fid}: child deleted between parent versions"
                    )

    for updates in results:
        updates.sort(key=lambda u: u.index)
    return results


def iter_child_ids(children: Iterable[Child]) -> list[FeatureID]:
    """The feature ids of the children, in order."""
    return [c.id for c in children]