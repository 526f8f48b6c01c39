"""Packed identifiers for OSM features (type + ref) and elements (type + ref + version)."""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterable, Optional

VERSION_BITS = 16
VERSION_MASK = 0x000000000000FFFF

REF_MASK = 0x00FFFFFFFFFF0000
FEATURE_MASK = 0x7FFFFFFFFFFF0000
TYPE_MASK = 0x7F00000000000000

BOUNDS_MASK = 0x0800000000000000
NODE_MASK = 0x1000000000000000
WAY_MASK = 0x2000000000000000
RELATION_MASK = 0x3000000000000000
CHANGESET_MASK = 0x4000000000000000
NOTE_MASK = 0x5000000000000000
USER_MASK = 0x6000000000000000

_INT_RE = re.compile(r"[+-]?[0-9]+")


class ElementType(str, Enum):
    """The kinds of OSM objects."""

    NODE = "node"
    WAY = "way"
    RELATION = "relation"
    CHANGESET = "changeset"
    NOTE = "note"
    USER = "user"
    BOUNDS = "bounds"

    def __str__(self) -> str:
        return self.value

    def feature_id(self, ref: int) -> "FeatureID":
        """Return the feature id for a node, way or relation with this ref."""
        mask = _FEATURE_TYPE_MASKS.get(self)
        if mask is None:
            raise ValueError(f"unknown type: {self.value}")
        return FeatureID(mask | (ref << VERSION_BITS))


_FEATURE_TYPE_MASKS = {
    ElementType.NODE: NODE_MASK,
    ElementType.WAY: WAY_MASK,
    ElementType.RELATION: RELATION_MASK,
}
_MASK_TYPES = {mask: kind for kind, mask in _FEATURE_TYPE_MASKS.items()}


def _type_of(value: int) -> Optional[ElementType]:
    return _MASK_TYPES.get(value & TYPE_MASK)


def _ref_of(value: int) -> int:
    return (value & REF_MASK) >> VERSION_BITS


def _require(kind: Optional[ElementType], expected: ElementType, what: object) -> None:
    if kind is not expected:
        raise ValueError(f"not a {expected.value}: {what}")


class FeatureID(int):
    """Identifies all versions of a node, way or relation."""

    def type(self) -> Optional[ElementType]:
        """The feature's type, or None if the type bits are invalid."""
        return _type_of(self)

    def ref(self) -> int:
        return _ref_of(self)

    def element_id(self, version: int) -> "ElementID":
        return ElementID(self | (VERSION_MASK & version))

    def node_id(self) -> int:
        _require(self.type(), ElementType.NODE, self)
        return self.ref()

    def way_id(self) -> int:
        _require(self.type(), ElementType.WAY, self)
        return self.ref()

    def relation_id(self) -> int:
        _require(self.type(), ElementType.RELATION, self)
        return self.ref()

    def __str__(self) -> str:
        kind = self.type()
        name = kind.value if kind is not None else "unknown"
        return f"{name}/{self.ref()}"

    def __repr__(self) -> str:
        return f"FeatureID({str(self)!r})"


class ElementID(int):
    """Identifies one specific version of a node, way or relation."""

    def type(self) -> ElementType:
        kind = _type_of(self)
        if kind is None:
            raise ValueError("unknown type")
        return kind

    def ref(self) -> int:
        return _ref_of(self)

    def version(self) -> int:
        return self & VERSION_MASK

    def feature_id(self) -> FeatureID:
        return FeatureID(self & FEATURE_MASK)

    def node_id(self) -> int:
        _require(_type_of(self), ElementType.NODE, self)
        return self.ref()

    def way_id(self) -> int:
        _require(_type_of(self), ElementType.WAY, self)
        return self.ref()

    def relation_id(self) -> int:
        _require(_type_of(self), ElementType.RELATION, self)
        return self.ref()

    def __str__(self) -> str:
        version = self.version()
        suffix = "-" if version == 0 else str(version)
        return f"{self.type().value}/{self.ref()}:{suffix}"

    def __repr__(self) -> str:
        return f"ElementID({str(self)!r})"


def _parse_int(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


def _parse_type(text: str) -> ElementType:
    try:
        return ElementType(text)
    except ValueError:
        raise ValueError(f"unknown type: {text}") from None


def parse_feature_id(s: str) -> FeatureID:
    """Parse a "type/ref" string as produced by FeatureID.__str__."""
    parts = s.split("/")
    if len(parts) != 2:
        raise ValueError(f"invalid feature id: {s}")
    try:
        ref = _parse_int(parts[1])
        return _parse_type(parts[0]).feature_id(ref)
    except ValueError as err:
        raise ValueError(f"invalid feature id: {s}: {err}") from err


def parse_element_id(s: str) -> ElementID:
    """Parse a "type/ref:version" string; the version may be "-" or absent."""
    parts = s.split("/")
    if len(parts) != 2:
        raise ValueError(f"invalid element id: {s}")
    sub = parts[1].split(":")
    if len(sub) not in (1, 2):
        raise ValueError(f"invalid element id: {s}")
    try:
        ref = _parse_int(sub[0])
        version = 0
        if len(sub) == 2 and sub[1] != "-":
            version = _parse_int(sub[1])
        fid = _parse_type(parts[0]).feature_id(ref)
    except ValueError as err:
        raise ValueError(f"invalid element id: {s}: {err}") from err
    return fid.element_id(version)


def _count(kinds: Iterable[Optional[ElementType]]) -> tuple[int, int, int]:
    nodes = ways = relations = 0
    for kind in kinds:
        if kind is ElementType.NODE:
            nodes += 1
        elif kind is ElementType.WAY:
            ways += 1
        elif kind is ElementType.RELATION:
            relations += 1
    return nodes, ways, relations


def feature_id_counts(ids: Iterable[int]) -> tuple[int, int, int]:
    """Return the number of (nodes, ways, relations) among the feature ids."""
    return _count(_type_of(i) for i in ids)


def element_id_counts(ids: Iterable[int]) -> tuple[int, int, int]:
    """Return the number of (nodes, ways, relations) among the element ids."""
    return _count(_type_of(i) for i in ids)


def _element_id(element) -> ElementID:
    return element.element_type.feature_id(element.id).element_id(element.version)


def element_ids(elements: Iterable) -> list[ElementID]:
    """Element ids of elements exposing element_type, id and version."""
    return [_element_id(e) for e in elements]


def feature_ids(elements: Iterable) -> list[FeatureID]:
    """Feature ids of elements exposing element_type and id."""
    return [e.element_type.feature_id(e.id) for e in elements]


def sort_elements(elements: list) -> None:
    """Sort in place by type (node, way, relation), then id, then version."""
    elements.sort(key=_element_id)