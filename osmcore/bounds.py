"""Geographic bounds of OSM data."""

from __future__ import annotations

import math
from dataclasses import dataclass


def _tile_lon(x: float, n: float) -> float:
    return x / n * 360.0 - 180.0


def _tile_lat(y: float, n: float) -> float:
    return math.degrees(math.atan(math.sinh(math.pi * (1.0 - 2.0 * y / n))))


@dataclass
class Bounds:
    """Latitude/longitude box, as found in the bounds element of an OSM file."""

    min_lat: float = 0.0
    max_lat: float = 0.0
    min_lon: float = 0.0
    max_lon: float = 0.0

    @classmethod
    def from_tile(cls, x: int, y: int, z: int) -> "Bounds":
        """Bounds of the web-mercator map tile x/y at zoom z."""
        n = 1 << z
        if not 0 <= x < n:
            raise ValueError("osm: x index out of range for this zoom")
        if not 0 <= y < n:
            raise ValueError("osm: y index out of range for this zoom")
        return cls(
            min_lat=_tile_lat(y + 1, n),
            max_lat=_tile_lat(y, n),
            min_lon=_tile_lon(x, n),
            max_lon=_tile_lon(x + 1, n),
        )

    def contains_node(self, node) -> bool:
        """True if the node's lat/lon is inside, boundary included."""
        return (
            self.min_lat <= node.lat <= self.max_lat
            and self.min_lon <= node.lon <= self.max_lon
        )