"""Load boundary features from GeoJSON, shapefiles and GeoParquet."""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

import geopandas as gpd
import pandas as pd
from shapely.geometry import mapping

from boundary_lookup.core.features import Feature
from boundary_lookup.data.constants import POLYGON_TYPES

logger = logging.getLogger(__name__)


class FeatureLoadError(Exception):
    """A boundary dataset could not be read."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot load features from {self.path}: {reason}")


def _clean_properties(row: Mapping[str, Any]) -> dict:
    """Drop NaN placeholders geopandas uses for missing attributes."""
    return {
        key: (None if not isinstance(value, (list, dict)) and pd.isna(value) else value)
        for key, value in row.items()
    }


def _to_geometry(geom: Any, position: int) -> Optional[dict]:
    """Convert a shapely geometry to a GeoJSON mapping, polygons only."""
    if geom is None or geom.is_empty:
        return None
    if geom.geom_type not in POLYGON_TYPES:
        logger.warning(
            "Feature %d has unsupported geometry type %s; it will never be located",
            position,
            geom.geom_type,
        )
        return None
    return dict(mapping(geom))


def features_from_geodataframe(gdf: gpd.GeoDataFrame) -> List[Feature]:
    """
    Convert GeoDataFrame rows to features, keeping row order.

    Coordinates are taken as-is; a non-geographic CRS is reported but not
    reprojected.

    Args:
        gdf: GeoDataFrame with polygon geometries and NAME_*/ID_* columns

    Returns:
        List of Feature objects, one per row
    """
    if gdf.crs is not None and not gdf.crs.is_geographic:
        logger.warning("Dataset CRS %s is not geographic; coordinates are used as-is", gdf.crs)

    geometry_col = gdf.geometry.name
    attributes = gdf.drop(columns=[geometry_col])

    features = []
    for position, (geom, (_, row)) in enumerate(zip(gdf.geometry, attributes.iterrows())):
        features.append(
            Feature(
                geometry=_to_geometry(geom, position),
                properties=_clean_properties(row.to_dict()),
            )
        )
    return features


def features_from_geojson(obj: Union[Mapping[str, Any], Iterable[Mapping[str, Any]]]) -> List[Feature]:
    """
    Convert a GeoJSON FeatureCollection (or a list of Feature mappings).

    Args:
        obj: FeatureCollection mapping or iterable of Feature mappings

    Returns:
        List of Feature objects in input order
    """
    if isinstance(obj, Mapping):
        if obj.get("type") != "FeatureCollection":
            raise ValueError("Expected a GeoJSON FeatureCollection")
        items: Iterable[Mapping[str, Any]] = obj.get("features") or []
    else:
        items = obj

    features = []
    for position, item in enumerate(items):
        geometry = item.get("geometry")
        if geometry is not None and geometry.get("type") not in POLYGON_TYPES:
            logger.warning(
                "Feature %d has unsupported geometry type %s; it will never be located",
                position,
                geometry.get("type"),
            )
        features.append(Feature.from_geojson(item))
    return features


def load_features(path: Union[str, Path], layer: Optional[str] = None) -> List[Feature]:
    """
    Load features from a boundary dataset.

    GeoParquet (.parquet) is read with geopandas.read_parquet, plain GeoJSON
    (.json/.geojson) with the json module, everything else with
    geopandas.read_file.

    Args:
        path: Dataset path
        layer: Layer name for multi-layer sources (GeoPackage)

    Returns:
        List of Feature objects in file order

    Raises:
        FeatureLoadError: If the file is missing or cannot be read
    """
    path = Path(path)
    if not path.exists():
        raise FeatureLoadError(path, "File not found")

    suffix = path.suffix.lower()
    try:
        if suffix in (".json", ".geojson") and layer is None:
            with open(path, encoding="utf-8") as f:
                features = features_from_geojson(json.load(f))
        elif suffix == ".parquet":
            features = features_from_geodataframe(gpd.read_parquet(path))
        else:
            features = features_from_geodataframe(gpd.read_file(path, layer=layer))
    except (OSError, RuntimeError, ValueError) as e:
        raise FeatureLoadError(path, str(e)) from e

    logger.debug("Loaded %d features from %s", len(features), path)
    return features
