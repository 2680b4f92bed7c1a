"""
boundary-lookup: Point-in-polygon and name search over administrative boundaries.

Index a static set of administrative-boundary polygons (Province, District,
Sector, Cell, Village) once, then answer two questions interactively:

- Which polygon contains this coordinate? (adaptive grid + ray casting)
- Which units match this text? (deduplicated hierarchical name index)
"""

from boundary_lookup.coords import (
    CoordinateParseError,
    CoordinateParser,
    decimal_to_dms,
    format_decimal,
    format_dms,
    parse_coordinates,
)
from boundary_lookup.core.features import Feature
from boundary_lookup.core.geometry import (
    BoundingBox,
    geometry_bounds,
    geometry_contains,
    point_in_polygon,
    point_in_ring,
)
from boundary_lookup.core.levels import AdminLevel
from boundary_lookup.core.lookup import BoundaryLookup, LookupResult
from boundary_lookup.core.spatial import SpatialIndex, build_spatial_index
from boundary_lookup.data.constants import UNKNOWN
from boundary_lookup.data.loader import (
    FeatureLoadError,
    features_from_geodataframe,
    features_from_geojson,
    load_features,
)
from boundary_lookup.search import (
    ParsedQuery,
    RegionStats,
    SearchEntry,
    SearchIndex,
    SearchResults,
    build_search_index,
    complete_query,
    normalize_text,
    parse_query,
)

__version__ = "0.1.0"
__all__ = [
    # Main API
    "BoundaryLookup",
    "LookupResult",
    "Feature",
    "AdminLevel",
    "UNKNOWN",
    # Spatial index
    "SpatialIndex",
    "build_spatial_index",
    "BoundingBox",
    "point_in_ring",
    "point_in_polygon",
    "geometry_contains",
    "geometry_bounds",
    # Search index
    "SearchIndex",
    "SearchEntry",
    "SearchResults",
    "RegionStats",
    "build_search_index",
    "normalize_text",
    "ParsedQuery",
    "parse_query",
    "complete_query",
    # Coordinates
    "CoordinateParser",
    "parse_coordinates",
    "decimal_to_dms",
    "format_dms",
    "format_decimal",
    # Loading
    "load_features",
    "features_from_geojson",
    "features_from_geodataframe",
    # Exceptions
    "CoordinateParseError",
    "FeatureLoadError",
]
