from dataclasses import dataclass

import pytest

from osmcore.datasource import ElementGroup, HistoryDatasource, NotFoundError
from osmcore.feature import ElementType


@dataclass
class _Element:
    element_type: ElementType
    id: int
    version: int = 0
    visible: bool = False


def _group():
    return ElementGroup(
        nodes=[_Element(ElementType.NODE, 1, v) for v in (1, 2)],
        ways=[_Element(ElementType.WAY, 1, v) for v in (1, 2, 3)],
        relations=[_Element(ElementType.RELATION, 1, v) for v in (1, 2, 3, 4)],
    )


@pytest.mark.parametrize("method", ["node_history", "way_history", "relation_history"])
def test_empty_datasource_not_found(method):
    ds = HistoryDatasource()
    with pytest.raises(NotFoundError) as info:
        getattr(ds, method)(1)
    assert ds.not_found(info.value) is True


def test_non_empty_datasource():
    ds = _group().history_datasource()
    assert [n.version for n in ds.node_history(1)] == [1, 2]
    assert len(ds.way_history(1)) == 3
    assert len(ds.relation_history(1)) == 4


@pytest.mark.parametrize("method", ["node_history", "way_history", "relation_history"])
def test_non_empty_datasource_not_found(method):
    ds = _group().history_datasource()
    with pytest.raises(NotFoundError) as info:
        getattr(ds, method)(2)
    assert ds.not_found(info.value) is True


def test_not_found_other_error():
    assert HistoryDatasource().not_found(KeyError("x")) is False


def test_add_sets_visibility():
    ds = HistoryDatasource()
    created = ElementGroup(nodes=[_Element(ElementType.NODE, 1, 1)])
    deleted = ElementGroup(nodes=[_Element(ElementType.NODE, 1, 2, visible=True)])
    ds.add(created, True)
    ds.add(deleted, False)
    assert [n.visible for n in ds.node_history(1)] == [True, False]


def test_add_without_visibility_keeps_value():
    ds = HistoryDatasource()
    ds.add(ElementGroup(ways=[_Element(ElementType.WAY, 5, 1, visible=True)]))
    assert ds.way_history(5)[0].visible is True


def test_add_none_is_noop():
    ds = HistoryDatasource()
    ds.add(None, True)
    assert ds.nodes == {} and ds.ways == {} and ds.relations == {}


def test_group_append():
    group = ElementGroup()
    group.append(_Element(ElementType.NODE, 1))
    group.append(_Element(ElementType.WAY, 2))
    group.append(_Element(ElementType.RELATION, 3))
    assert [n.id for n in group.nodes] == [1]
    assert [w.id for w in group.ways] == [2]
    assert [r.id for r in group.relations] == [3]


def test_group_append_unsupported():
    with pytest.raises(TypeError):
        ElementGroup().append(_Element(ElementType.CHANGESET, 1))