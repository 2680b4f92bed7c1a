"""Tests for bounding boxes and ray casting."""

import pytest

from boundary_lookup import (
    BoundingBox,
    geometry_bounds,
    geometry_contains,
    point_in_polygon,
    point_in_ring,
)

TRIANGLE = [[0, 0], [10, 0], [5, 10], [0, 0]]
SQUARE = [[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]]
HOLE = [[4, 4], [6, 4], [6, 6], [4, 6], [4, 4]]


class TestPointInRing:
    """Tests for the even-odd ray casting rule."""

    def test_inside_triangle(self):
        assert point_in_ring(5, 3, TRIANGLE) is True

    def test_outside_triangle(self):
        assert point_in_ring(1, 8, TRIANGLE) is False
        assert point_in_ring(20, 3, TRIANGLE) is False

    def test_open_ring(self):
        """Rings without the closing point behave the same."""
        assert point_in_ring(5, 5, SQUARE[:-1]) is True
        assert point_in_ring(15, 5, SQUARE[:-1]) is False

    def test_concave_ring(self):
        """A U shape: the notch is outside."""
        u_shape = [[0, 0], [9, 0], [9, 9], [6, 9], [6, 3], [3, 3], [3, 9], [0, 9]]
        assert point_in_ring(1.5, 6, u_shape) is True
        assert point_in_ring(4.5, 6, u_shape) is False
        assert point_in_ring(7.5, 6, u_shape) is True

    def test_degenerate_rings_contain_nothing(self):
        assert point_in_ring(0, 0, []) is False
        assert point_in_ring(0, 0, [[0, 0]]) is False
        assert point_in_ring(0.5, 0.5, [[0, 0], [1, 1]]) is False

    def test_horizontal_boundaries_are_half_open(self):
        """The bottom edge counts as inside, the top edge as outside."""
        assert point_in_ring(5, 0, SQUARE) is True
        assert point_in_ring(5, 10, SQUARE) is False


class TestPointInPolygon:
    """Tests for polygons with holes."""

    def test_inside_exterior(self):
        assert point_in_polygon(2, 2, [SQUARE, HOLE]) is True

    def test_inside_hole(self):
        assert point_in_polygon(5, 5, [SQUARE, HOLE]) is False

    def test_outside_exterior(self):
        assert point_in_polygon(12, 5, [SQUARE, HOLE]) is False

    def test_empty_polygon(self):
        assert point_in_polygon(5, 5, []) is False


class TestGeometryContains:
    """Tests for Polygon and MultiPolygon mappings."""

    def test_polygon(self):
        geometry = {"type": "Polygon", "coordinates": [SQUARE]}
        assert geometry_contains(geometry, 5, 5) is True
        assert geometry_contains(geometry, 11, 5) is False

    def test_multipolygon_any_part(self):
        far = [[[20, 20], [30, 20], [30, 30], [20, 30], [20, 20]]]
        geometry = {"type": "MultiPolygon", "coordinates": [[SQUARE], far]}
        assert geometry_contains(geometry, 5, 5) is True
        assert geometry_contains(geometry, 25, 25) is True
        assert geometry_contains(geometry, 15, 15) is False

    def test_multipolygon_holes_per_part(self):
        geometry = {"type": "MultiPolygon", "coordinates": [[SQUARE, HOLE]]}
        assert geometry_contains(geometry, 5, 5) is False

    def test_missing_or_empty_geometry(self):
        assert geometry_contains(None, 0, 0) is False
        assert geometry_contains({"type": "Polygon", "coordinates": []}, 0, 0) is False
        assert geometry_contains({"type": "MultiPolygon", "coordinates": [[]]}, 0, 0) is False

    def test_unsupported_type(self):
        assert geometry_contains({"type": "Point", "coordinates": [0, 0]}, 0, 0) is False


class TestGeometryBounds:
    """Tests for bounding box computation."""

    def test_polygon_bounds(self):
        box = geometry_bounds({"type": "Polygon", "coordinates": [TRIANGLE]})
        assert box == BoundingBox(south=0, north=10, west=0, east=10)

    def test_multipolygon_bounds(self):
        far = [[[20, -5], [30, -5], [30, 30], [20, 30], [20, -5]]]
        box = geometry_bounds({"type": "MultiPolygon", "coordinates": [[SQUARE], far]})
        assert box == BoundingBox(south=-5, north=30, west=0, east=30)

    def test_degenerate_rings_ignored(self):
        geometry = {"type": "Polygon", "coordinates": [[[0, 0], [100, 100]]]}
        assert geometry_bounds(geometry) is None

    def test_empty_geometry(self):
        assert geometry_bounds(None) is None
        assert geometry_bounds({"type": "Polygon", "coordinates": []}) is None


class TestBoundingBox:
    """Tests for BoundingBox."""

    def test_contains_is_inclusive(self):
        box = BoundingBox(south=0, north=1, west=0, east=1)
        assert box.contains(0, 0)
        assert box.contains(1, 1)
        assert not box.contains(1.01, 0.5)

    def test_union_and_merge(self):
        a = BoundingBox(south=0, north=1, west=0, east=1)
        b = BoundingBox(south=-1, north=0.5, west=2, east=3)
        assert a.union(b) == BoundingBox(south=-1, north=1, west=0, east=3)
        assert BoundingBox.merge([None, a, None, b]) == a.union(b)
        assert BoundingBox.merge([None]) is None

    def test_center_and_bounds(self):
        box = BoundingBox(south=-2, north=-1, west=30, east=31)
        assert box.center == pytest.approx((-1.5, 30.5))
        assert box.to_bounds() == (30, -2, 31, -1)
