"""Errors raised while annotating ways and relations."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from osmcore.annotate.core import CoreNoHistoryError, CoreNoVisibleChildError
from osmcore.feature import ElementType, FeatureID


class NoHistoryError(LookupError):
    """No history exists for a specific child."""

    def __init__(self, id: FeatureID) -> None:
        self.id = id
        super().__init__(f"element history not found for {id}")


class NoVisibleChildError(LookupError):
    """No child is visible for a parent at the given time."""

    def __init__(self, id: FeatureID, timestamp: Optional[datetime] = None) -> None:
        self.id = id
        self.timestamp = timestamp
        super().__init__(f"no visible child for {id} at {timestamp}")


class UnsupportedMemberTypeError(ValueError):
    """A relation member is not a node, way or relation."""

    def __init__(
        self,
        member_type: Optional[ElementType],
        relation_id: int = 0,
        index: int = 0,
    ) -> None:
        self.relation_id = relation_id
        self.member_type = member_type
        self.index = index
        super().__init__(
            f"unsupported member type {member_type} for relation {relation_id} at {index}"
        )


def map_errors(err: BaseException) -> BaseException:
    """Translate errors of the matching core into their public counterparts.

    Any other error is returned unchanged.
    """
    if isinstance(err, CoreNoHistoryError):
        mapped: BaseException = NoHistoryError(err.child_id)
    elif isinstance(err, CoreNoVisibleChildError):
        mapped = NoVisibleChildError(err.child_id, err.timestamp)
    else:
        return err
    mapped.__cause__ = err
    return mapped