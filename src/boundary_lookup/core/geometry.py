"""Bounding boxes and point-in-polygon tests on GeoJSON-style coordinates."""

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, Tuple

# A ring is a closed sequence of (lon, lat) pairs
Ring = Sequence[Sequence[float]]
PolygonCoords = Sequence[Ring]


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box in degrees."""

    south: float
    north: float
    west: float
    east: float

    def contains(self, lat: float, lon: float) -> bool:
        """Inclusive containment test."""
        return self.south <= lat <= self.north and self.west <= lon <= self.east

    def union(self, other: "BoundingBox") -> "BoundingBox":
        """Smallest box covering both boxes."""
        return BoundingBox(
            south=min(self.south, other.south),
            north=max(self.north, other.north),
            west=min(self.west, other.west),
            east=max(self.east, other.east),
        )

    @property
    def center(self) -> Tuple[float, float]:
        """Return (lat, lon) of the box center."""
        return ((self.south + self.north) / 2, (self.west + self.east) / 2)

    @property
    def lat_range(self) -> float:
        return self.north - self.south

    @property
    def lon_range(self) -> float:
        return self.east - self.west

    def to_bounds(self) -> Tuple[float, float, float, float]:
        """Return (minx, miny, maxx, maxy), the shapely/geopandas ordering."""
        return (self.west, self.south, self.east, self.north)

    @classmethod
    def merge(cls, boxes: Iterable[Optional["BoundingBox"]]) -> Optional["BoundingBox"]:
        """Union of all non-empty boxes, or None if there are none."""
        result: Optional[BoundingBox] = None
        for box in boxes:
            if box is None:
                continue
            result = box if result is None else result.union(box)
        return result


def iter_polygons(geometry: Optional[Mapping[str, Any]]) -> Iterator[PolygonCoords]:
    """Yield polygon coordinate arrays of a Polygon or MultiPolygon mapping."""
    if not geometry:
        return
    coordinates = geometry.get("coordinates") or []
    geom_type = geometry.get("type")
    if geom_type == "Polygon":
        yield coordinates
    elif geom_type == "MultiPolygon":
        for polygon in coordinates:
            yield polygon or []


def point_in_ring(lon: float, lat: float, ring: Ring) -> bool:
    """
    Even-odd ray casting test for a single ring.

    A ray is cast from the point towards increasing longitude; every edge
    crossing toggles the result. Rings with fewer than 3 points contain nothing.
    """
    n = len(ring)
    if n < 3:
        return False

    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = ring[i][0], ring[i][1]
        xj, yj = ring[j][0], ring[j][1]
        # (yi > lat) != (yj > lat) guarantees yi != yj
        if (yi > lat) != (yj > lat) and lon < (xj - xi) * (lat - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def point_in_polygon(lon: float, lat: float, polygon: PolygonCoords) -> bool:
    """Inside the exterior ring and outside every hole."""
    if len(polygon) == 0:
        return False
    if not point_in_ring(lon, lat, polygon[0]):
        return False
    for hole in polygon[1:]:
        if point_in_ring(lon, lat, hole):
            return False
    return True


def geometry_contains(geometry: Optional[Mapping[str, Any]], lon: float, lat: float) -> bool:
    """Containment for a Polygon, or any part of a MultiPolygon."""
    return any(point_in_polygon(lon, lat, polygon) for polygon in iter_polygons(geometry))


def geometry_bounds(geometry: Optional[Mapping[str, Any]]) -> Optional[BoundingBox]:
    """
    Bounding box over all rings of all polygons.

    Rings with fewer than 3 points are ignored; returns None when no ring
    qualifies.
    """
    south = west = float("inf")
    north = east = float("-inf")
    found = False

    for polygon in iter_polygons(geometry):
        for ring in polygon:
            if len(ring) < 3:
                continue
            for position in ring:
                lon, lat = position[0], position[1]
                south = min(south, lat)
                north = max(north, lat)
                west = min(west, lon)
                east = max(east, lon)
            found = True

    if not found:
        return None
    return BoundingBox(south=south, north=north, west=west, east=east)
