"""Administrative boundary features."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from boundary_lookup.core.geometry import BoundingBox, geometry_bounds
from boundary_lookup.core.levels import AdminLevel
from boundary_lookup.data.constants import ID_KEYS, NAME_KEYS, POLYGON_TYPES, UNKNOWN


@dataclass(frozen=True, eq=False)
class Feature:
    """
    One administrative polygon or multi-polygon with its hierarchy attributes.

    Features compare and hash by identity; their geometry and properties are
    plain mappings.

    Attributes:
        geometry: GeoJSON-style geometry mapping ("type" and "coordinates"),
            rings made of (lon, lat) pairs
        properties: Flat attribute mapping with NAME_0..NAME_5 and ID_0..ID_5
    """

    geometry: Optional[Mapping[str, Any]]
    properties: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_geojson(cls, obj: Mapping[str, Any]) -> "Feature":
        """Create from a GeoJSON Feature mapping."""
        geometry = obj.get("geometry")
        if geometry is not None and geometry.get("type") not in POLYGON_TYPES:
            geometry = None
        return cls(geometry=geometry, properties=dict(obj.get("properties") or {}))

    def label(self, key: str) -> str:
        """Return an attribute as text, or "Unknown" when missing or empty."""
        value = self.properties.get(key) if self.properties else None
        if value is None or value == "":
            return UNKNOWN
        return str(value)

    def level_name(self, level: AdminLevel) -> str:
        """Return this feature's name at a hierarchy level."""
        return self.label(level.name_attribute)

    @property
    def country(self) -> str:
        return self.label(NAME_KEYS[0])

    @property
    def name(self) -> str:
        """Village name, the leaf of the hierarchy."""
        return self.label(NAME_KEYS[5])

    @property
    def feature_id(self) -> str:
        """Composite identifier built from ID_0..ID_5."""
        return "-".join(self.label(key) for key in ID_KEYS)

    def id_path(self) -> str:
        """Identifier breadcrumb, e.g. "P1 / D2 / S3 / C4 / V5"."""
        return " / ".join(
            f"{level.label[0]}{self.label(level.id_attribute)}" for level in AdminLevel.ordered()
        )

    def hierarchy(self) -> Dict[str, str]:
        """Names from Village up to Country."""
        result = {
            level.label: self.level_name(level) for level in reversed(AdminLevel.ordered())
        }
        result["Country"] = self.country
        return result

    @property
    def is_polygonal(self) -> bool:
        """Check if the geometry is a Polygon or MultiPolygon."""
        return bool(self.geometry) and self.geometry.get("type") in POLYGON_TYPES

    @property
    def bounds(self) -> Optional[BoundingBox]:
        """Bounding box, or None for empty or degenerate geometry."""
        return geometry_bounds(self.geometry)

    def to_geojson(self) -> Dict[str, Any]:
        """Convert to a GeoJSON Feature mapping."""
        return {
            "type": "Feature",
            "geometry": dict(self.geometry) if self.geometry else None,
            "properties": dict(self.properties),
        }
