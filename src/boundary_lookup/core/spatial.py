"""Spatial index and point-in-polygon operations."""

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

import geopandas as gpd
import pandas as pd
from shapely.geometry import Point

from boundary_lookup.core.features import Feature
from boundary_lookup.core.geometry import BoundingBox, geometry_contains

logger = logging.getLogger(__name__)


class SpatialIndex:
    """
    Adaptive uniform grid for point-in-polygon lookups.

    Feature bounding boxes are binned into a grid sized to the dataset's
    density. A lookup reads the single cell under the point and runs the
    exact ray casting test on that cell's candidates only.

    The index is immutable once built and safe to query from several threads.
    """

    # Aim for roughly this many features per cell
    TARGET_FEATURES_PER_CELL = 4

    # Grid resolution bounds, tuned for a country-sized dataset of ~15-20k
    # village polygons
    MIN_GRID_SIZE = 30
    MAX_GRID_SIZE = 80

    def __init__(
        self,
        features: Sequence[Feature],
        target_per_cell: Optional[int] = None,
        min_grid_size: Optional[int] = None,
        max_grid_size: Optional[int] = None,
    ):
        """
        Build the grid from an ordered feature sequence.

        Args:
            features: Features to index; positions are the feature indices
            target_per_cell: Override TARGET_FEATURES_PER_CELL
            min_grid_size: Override MIN_GRID_SIZE
            max_grid_size: Override MAX_GRID_SIZE
        """
        self._features: Tuple[Feature, ...] = tuple(features)
        self._target = target_per_cell or self.TARGET_FEATURES_PER_CELL
        self._min_size = min_grid_size or self.MIN_GRID_SIZE
        self._max_size = max_grid_size or self.MAX_GRID_SIZE

        self._feature_bounds: Tuple[Optional[BoundingBox], ...] = tuple(
            feature.bounds for feature in self._features
        )
        self._bounds = BoundingBox.merge(self._feature_bounds)
        self._grid_size = self.compute_grid_size(len(self._features))

        if self._bounds is not None:
            self._cell_lat = self._bounds.lat_range / self._grid_size or 1.0
            self._cell_lon = self._bounds.lon_range / self._grid_size or 1.0
        else:
            self._cell_lat = self._cell_lon = 1.0

        self._grid = self._build_grid()

        logger.debug(
            "Built spatial index: %d features, %dx%d grid, %d populated cells",
            len(self._features),
            self._grid_size,
            self._grid_size,
            len(self._grid),
        )

    def compute_grid_size(self, n: int) -> int:
        """Grid resolution for n features: clamp(ceil(sqrt(n / target)), min, max)."""
        optimal = math.ceil(math.sqrt(n / self._target))
        return max(self._min_size, min(self._max_size, optimal))

    def _key(self, row: int, col: int) -> int:
        return row * self._grid_size + col

    def _clamp(self, value: int) -> int:
        return max(0, min(self._grid_size - 1, value))

    def _build_grid(self) -> Dict[int, Tuple[int, ...]]:
        """Register every feature in each cell its bounding box overlaps."""
        if self._bounds is None:
            return {}

        grid: Dict[int, List[int]] = {}
        min_lat, min_lon = self._bounds.south, self._bounds.west

        for index, box in enumerate(self._feature_bounds):
            if box is None:
                continue

            south = math.floor((box.south - min_lat) / self._cell_lat)
            north = math.ceil((box.north - min_lat) / self._cell_lat)
            west = math.floor((box.west - min_lon) / self._cell_lon)
            east = math.ceil((box.east - min_lon) / self._cell_lon)

            for row in range(max(0, south), min(self._grid_size - 1, north) + 1):
                for col in range(max(0, west), min(self._grid_size - 1, east) + 1):
                    grid.setdefault(self._key(row, col), []).append(index)

        return {key: tuple(indices) for key, indices in grid.items()}

    def _cell_for(self, lat: float, lon: float) -> int:
        """Grid key of the cell under a point already inside the bounds."""
        assert self._bounds is not None
        row = self._clamp(math.floor((lat - self._bounds.south) / self._cell_lat))
        col = self._clamp(math.floor((lon - self._bounds.west) / self._cell_lon))
        return self._key(row, col)

    def candidates(self, lat: float, lon: float) -> Tuple[int, ...]:
        """Feature indices registered in the cell under a point."""
        if self._bounds is None or not self._bounds.contains(lat, lon):
            return ()
        return self._grid.get(self._cell_for(lat, lon), ())

    def locate_coordinates(self, lat: float, lon: float) -> Optional[int]:
        """
        Find the index of the first feature containing a coordinate.

        Two-phase approach:
        1. Candidates from the single grid cell under the point
        2. Bounding box check, then exact point-in-polygon test

        Args:
            lat: Latitude (decimal degrees)
            lon: Longitude (decimal degrees)

        Returns:
            Feature index if found, None otherwise
        """
        for index in self.candidates(lat, lon):
            box = self._feature_bounds[index]
            if box is None or not box.contains(lat, lon):
                continue
            if geometry_contains(self._features[index].geometry, lon, lat):
                return index
        return None

    def locate_index(self, point: Point) -> Optional[int]:
        """Find the feature index containing a shapely Point (x=lon, y=lat)."""
        return self.locate_coordinates(lat=point.y, lon=point.x)

    def locate(self, point: Point) -> Optional[Feature]:
        """
        Find the feature containing a point.

        Args:
            point: Shapely Point object (x=lon, y=lat)

        Returns:
            The first containing Feature in sequence order, None otherwise
        """
        index = self.locate_index(point)
        return None if index is None else self._features[index]

    def lookup_batch(self, points: gpd.GeoSeries) -> pd.DataFrame:
        """
        Look up a series of points.

        Args:
            points: GeoSeries of Point geometries (missing points allowed)

        Returns:
            DataFrame with a nullable "feature_index" column, one row per point
        """
        indices = [
            None if point is None or point.is_empty else self.locate_index(point)
            for point in points
        ]
        return pd.DataFrame(
            {"feature_index": pd.array(indices, dtype="Int64")},
            index=points.index,
        )

    def feature_bounds(self, index: int) -> Optional[BoundingBox]:
        """Cached bounding box of a feature."""
        return self._feature_bounds[index]

    @property
    def features(self) -> Tuple[Feature, ...]:
        return self._features

    @property
    def bounds(self) -> Optional[Tuple[float, float, float, float]]:
        """Overall (minx, miny, maxx, maxy), None for an empty index."""
        return None if self._bounds is None else self._bounds.to_bounds()

    @property
    def bounding_box(self) -> Optional[BoundingBox]:
        return self._bounds

    @property
    def grid_size(self) -> int:
        return self._grid_size

    @property
    def cell_count(self) -> int:
        """Number of populated grid cells."""
        return len(self._grid)

    def __len__(self) -> int:
        return len(self._features)


def build_spatial_index(features: Sequence[Feature]) -> SpatialIndex:
    """Build a SpatialIndex over an ordered feature sequence."""
    return SpatialIndex(features)
