"""Main BoundaryLookup class - the primary user interface."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd

from boundary_lookup.coords.parser import CoordinateParseError, CoordinateParser
from boundary_lookup.core.features import Feature
from boundary_lookup.core.geometry import BoundingBox
from boundary_lookup.core.levels import AdminLevel
from boundary_lookup.core.spatial import SpatialIndex
from boundary_lookup.data.loader import load_features
from boundary_lookup.search.index import RegionStats, SearchEntry, SearchIndex, SearchResults


@dataclass
class LookupResult:
    """Result from a single coordinate lookup."""

    # Input
    input_text: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    match_type: str = "no_match"  # "contained", "no_match", "parse_error"

    # Containing feature
    feature_index: Optional[int] = None
    feature_id: Optional[str] = None
    id_path: Optional[str] = None

    # Names from Village up to Country
    names: Dict[str, str] = field(default_factory=dict)

    @property
    def is_matched(self) -> bool:
        """Check if the lookup found a containing feature."""
        return self.feature_index is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "input_text": self.input_text,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "match_type": self.match_type,
            "feature_index": self.feature_index,
            "feature_id": self.feature_id,
            "id_path": self.id_path,
            **self.names,
        }

    def to_series(self) -> pd.Series:
        """Convert to pandas Series."""
        return pd.Series(self.to_dict())


class BoundaryLookup:
    """
    Main interface for boundary-lookup.

    Builds the spatial index and the search index side by side over one
    immutable feature sequence. Both are read-only afterwards; to use a new
    dataset, build a new BoundaryLookup.

    Example usage:
        >>> lookup = BoundaryLookup.from_file("villages.geojson")
        >>> result = lookup.locate(-1.94, 29.87)
        >>> print(result.names["Village"])
        >>> for entry in lookup.search(":cell kigali"):
        ...     print(entry.name, entry.parents_label)
    """

    def __init__(self, features: Sequence[Feature]):
        """
        Initialize BoundaryLookup.

        Args:
            features: Ordered features; positions are the feature indices
        """
        self._features = tuple(features)
        self._spatial = SpatialIndex(self._features)
        self._search = SearchIndex(self._features)
        self._parser = CoordinateParser()

    @classmethod
    def from_file(cls, path: Union[str, Path], layer: Optional[str] = None) -> "BoundaryLookup":
        """Load a boundary dataset and index it."""
        return cls(load_features(path, layer=layer))

    def _result_for(self, index: int, **kwargs: Any) -> LookupResult:
        feature = self._features[index]
        return LookupResult(
            match_type="contained",
            feature_index=index,
            feature_id=feature.feature_id,
            id_path=feature.id_path(),
            names=feature.hierarchy(),
            **kwargs,
        )

    def locate(self, lat: float, lon: float) -> LookupResult:
        """
        Find the feature containing a coordinate.

        Args:
            lat: Latitude (decimal degrees)
            lon: Longitude (decimal degrees)

        Returns:
            LookupResult with the feature and its hierarchy names
        """
        index = self._spatial.locate_coordinates(lat, lon)
        if index is None:
            return LookupResult(latitude=lat, longitude=lon, match_type="no_match")
        return self._result_for(index, latitude=lat, longitude=lon)

    def locate_text(self, text: str) -> LookupResult:
        """
        Parse a coordinate string ("lat, lon" or DMS) and locate it.

        Returns:
            LookupResult; match_type is "parse_error" when the text is not a
            valid coordinate
        """
        try:
            lat, lon = self._parser.parse(text)
        except CoordinateParseError:
            return LookupResult(input_text=text, match_type="parse_error")

        result = self.locate(lat, lon)
        result.input_text = text
        return result

    def locate_batch(
        self,
        df: pd.DataFrame,
        lat_column: str = "latitude",
        lon_column: str = "longitude",
        progress: bool = False,
    ) -> pd.DataFrame:
        """
        Locate every row of a DataFrame.

        Args:
            df: DataFrame with lat/lon columns
            lat_column: Name of latitude column
            lon_column: Name of longitude column
            progress: Show progress bar

        Returns:
            Copy of df with feature_index, feature_id and level name columns
        """
        pairs = zip(df[lat_column], df[lon_column])
        if progress:
            from tqdm import tqdm

            pairs = tqdm(pairs, total=len(df), desc="Locating")

        rows: List[Dict[str, Any]] = []
        for lat, lon in pairs:
            index = None
            if pd.notna(lat) and pd.notna(lon):
                index = self._spatial.locate_coordinates(float(lat), float(lon))

            if index is None:
                rows.append({"feature_index": None, "feature_id": None})
                continue

            feature = self._features[index]
            rows.append(
                {
                    "feature_index": index,
                    "feature_id": feature.feature_id,
                    **{level.label: feature.level_name(level) for level in AdminLevel.ordered()},
                }
            )

        columns = ["feature_index", "feature_id"] + [level.label for level in AdminLevel.ordered()]
        located = pd.DataFrame(rows, index=df.index, columns=columns)
        located["feature_index"] = located["feature_index"].astype("Int64")

        return pd.concat([df, located], axis=1)

    def search(
        self,
        query: Optional[str],
        level: Union[AdminLevel, str, None] = None,
    ) -> SearchResults:
        """Search administrative units by name (see SearchIndex.search)."""
        return self._search.search(query, level)

    def entry(self, key: str) -> Optional[SearchEntry]:
        """Reconstruct a previously chosen entry from its key."""
        return self._search.entry(key)

    def entry_features(self, entry: SearchEntry) -> List[Feature]:
        """Features aggregated by an entry, in feature order."""
        return [self._features[i] for i in entry.indices]

    def entry_bounds(self, entry: SearchEntry) -> Optional[BoundingBox]:
        """Box covering all of an entry's features."""
        return BoundingBox.merge(self._spatial.feature_bounds(i) for i in entry.indices)

    def region_stats(self, entry: SearchEntry) -> RegionStats:
        """Distinct descendant units under an entry."""
        return self._search.region_stats(entry)

    def feature(self, index: int) -> Feature:
        return self._features[index]

    @property
    def features(self) -> Sequence[Feature]:
        return self._features

    @property
    def spatial_index(self) -> SpatialIndex:
        return self._spatial

    @property
    def search_index(self) -> SearchIndex:
        return self._search

    def __len__(self) -> int:
        return len(self._features)
