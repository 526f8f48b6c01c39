# osmcore

Tools for OpenStreetMap data and its history, in plain Python with no
dependencies.

## What is in it

- `osmcore.feature`: packed integer identifiers.
  - `FeatureID` holds a type and a ref. `ElementID` also holds a version.
  - Both sort by type (node, way, relation), then by ref, then by version.
  - Each has `type()`, `ref()`, `node_id()`, `way_id()` and `relation_id()`.
    The last three raise `ValueError` on the wrong type.
  - `ElementType.NODE.feature_id(1)` builds an id.
  - `parse_feature_id("way/3")` and `parse_element_id("node/1:2")` read ids from text. The version may be `-` or left out.
  - `feature_id_counts`, `element_id_counts`, `element_ids`, `feature_ids` and `sort_elements` are helpers for lists of ids and elements.
- `osmcore.bounds.Bounds`: a latitude/longitude box.
  - `Bounds.from_tile(x, y, z)` gives the box of a web-mercator map tile.
  - `contains_node(node)` includes the boundary.
- `osmcore.datasource`:
  - `ElementGroup` holds lists of nodes, ways and relations.
  - `HistoryDatasource` keys every version of an element by its id:
    - `node_history`, `way_history` and `relation_history` return those versions.
    - They raise `NotFoundError` when there are none.
    - `not_found(err)` tells whether an error is that one.
- `osmcore.change`:
  - `Change` holds `create`/`modify`/`delete` groups. `history_datasource()` marks creates and modifies visible and deletes not visible.
  - `Diff`, `Action` and `ActionType` describe a diff.
- `osmcore.changeset`:
  - `Changeset` has tag helpers: `comment()`, `created_by()`, `locale()`, `host()`, `imagery_used()`, `source()` and `bot()`.
  - `Changeset.bounds()` returns the changeset's box.
  - The module also has `ChangesetDiscussion`, `ChangesetComment` and `changeset_ids()`.
- `osmcore.annotate`: matches each version of a way or relation with the versions of its children. It also records the minor updates that happen between parent versions.

## Elements are your own objects

The package has no node, way or relation classes. Any object with these attributes works, such as a dataclass or a `SimpleNamespace`:

- Nodes: `id`, `version`, `changeset_id`, `visible`, `timestamp`, `committed`, `lat`, `lon`.
- Ways: the same fields except `lat` and `lon`, plus `nodes`. Each way node has `id` and `version`.
- Relations: the same fields except `lat` and `lon`, plus `members`. Each member has `type`, `ref` and `version`.
- `ElementGroup.append` and the id helpers also need `element_type`, which is an `ElementType`.

Timestamps are timezone-aware `datetime` values. `committed` may be `None`.

## Annotating way history

```python
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace as NS

from osmcore.datasource import ElementGroup
from osmcore.annotate.way import annotate_ways
from osmcore.annotate.options import threshold

t = datetime(2012, 1, 1, tzinfo=timezone.utc)
node_v1 = NS(id=1, version=1, changeset_id=0, visible=True,
             timestamp=t, committed=None, lat=1.0, lon=2.0)
way_v1 = NS(id=1, version=1, changeset_id=0, visible=True,
            timestamp=t, committed=None, nodes=[NS(id=1, version=0)])

datasource = ElementGroup(nodes=[node_v1]).history_datasource()
annotate_ways([way_v1], datasource, threshold(timedelta(minutes=30)))

print(way_v1.nodes[0].version, way_v1.nodes[0].lat)   # 1 1.0
print(way_v1.updates)                                  # []
```

What `annotate_ways(ways, datasource, *options)` does:

- `ways` are the versions of one way, in ascending order.
- It sets each way node's `version`, `changeset_id`, `lat` and `lon`.
- It stores a list of `Update` objects in each way's `updates`.

`annotate_relations` in `osmcore.annotate.relation` does the same for relation members. Members must be nodes, ways or relations. Any other type raises `UnsupportedMemberTypeError`.

These options come from `osmcore.annotate.options`:

- `threshold(duration)`: the default is 30 minutes.
- `ignore_inconsistency(yes)`
- `ignore_missing_children(yes)`
- `child_filter(fn)`

Errors from `osmcore.annotate.errors`:

- `NoHistoryError`: a child has no history at all.
- `NoVisibleChildError`: no child version is visible for a parent version.

A child that is deleted between two parent versions raises `ValueError`, unless inconsistency is ignored.

The lower-level pieces are also available:

- `osmcore.annotate.core`: `compute`, `ChildList`, `Parent` and `Datasourcer`.
- `osmcore.annotate.sources`: `WayDatasource`, `RelationDatasource`, the `*_to_child_list` helpers and `is_reverse`.
- `osmcore.annotate.child`: `Child` and `Update`.
- `osmcore.annotate.geo`: `way_centroid` and `way_point_on_surface`.

## Turning a change into a diff

`osmcore.annotate.change_diff.annotate_change(change, datasource, *options)` returns a `Diff`:

- Every created element becomes a create action.
- Every modified or deleted element is paired with its latest earlier version from the datasource.
- When there is no earlier version, `NoVisibleChildError` is raised.
- With `ignore_missing_children(True)`, such an element is reported as a create instead.

## Ordering relations children first

Relations can contain other relations, so the members should be annotated first:

```python
from osmcore.annotate.order import ChildFirstOrdering

ordering = ChildFirstOrdering(relation_ids, datasource)
for relation_id in ordering:
    ...
```

- Circular references are cut where they close.
- Relations with no history are skipped.
- `completed_index` is the index of the last input id whose whole tree has been yielded.
- After `close()`, iterating further raises `OrderingCancelled`.

## What it does not do

- It does not read or write OSM XML, OsmChange or protobuf data. You build elements yourself.
- It does not talk to the OSM API.
- It does not record the orientation of multipolygon members.
- `is_reverse` never reports a closed way as reversed.

## Running the tests

```
pip install .[test]
pytest
```