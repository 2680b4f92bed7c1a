"""Core functionality for boundary-lookup."""

from boundary_lookup.core.features import Feature
from boundary_lookup.core.geometry import BoundingBox
from boundary_lookup.core.levels import AdminLevel
from boundary_lookup.core.lookup import BoundaryLookup, LookupResult
from boundary_lookup.core.spatial import SpatialIndex, build_spatial_index

__all__ = [
    "BoundaryLookup",
    "LookupResult",
    "Feature",
    "BoundingBox",
    "AdminLevel",
    "SpatialIndex",
    "build_spatial_index",
]
