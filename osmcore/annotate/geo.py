"""Geometric helpers for ways."""

from __future__ import annotations

import math

EARTH_RADIUS = 6378137.0

Point = tuple[float, float]


def _distance(p1: Point, p2: Point) -> float:
    """Haversine distance in meters between two (lon, lat) points."""
    d_lat = math.radians(p1[1] - p2[1])
    d_lon = math.radians(p1[0] - p2[0])
    s_lat = math.sin(d_lat / 2)
    s_lon = math.sin(d_lon / 2)
    a = s_lat * s_lat + math.cos(math.radians(p1[1])) * math.cos(
        math.radians(p2[1])
    ) * s_lon * s_lon
    return 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a)) * EARTH_RADIUS


def _point(node) -> Point:
    return (node.lon, node.lat)


def way_centroid(way) -> Point:
    """Length-weighted centroid (lon, lat) of the way's line; NaN if it has no length."""
    total = 0.0
    lon = lat = 0.0
    points = [_point(n) for n in way.nodes]
    for a, b in zip(points, points[1:]):
        d = _distance(a, b)
        lon += (a[0] + b[0]) / 2.0 * d
        lat += (a[1] + b[1]) / 2.0 * d
        total += d

    if total == 0:
        return (math.nan, math.nan)
    return (lon / total, lat / total)


def way_point_on_surface(way) -> Point:
    """The way node closest to the centroid, as (lon, lat)."""
    centroid = way_centroid(way)
    best = math.inf
    index = 0
    for i, node in enumerate(way.nodes):
        d = _distance(centroid, _point(node))
        if d < best:
            best = d
            index = i
    return _point(way.nodes[index])