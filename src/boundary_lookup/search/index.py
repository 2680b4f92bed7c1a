"""Hierarchical search index over administrative names."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from boundary_lookup.core.features import Feature
from boundary_lookup.core.levels import AdminLevel
from boundary_lookup.data.constants import PARENT_KEY_SEPARATOR, PARENT_SEPARATOR
from boundary_lookup.search.normalizer import normalize_text
from boundary_lookup.search.query import parse_query

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchEntry:
    """One named administrative unit: a distinct (level, name, parent path)."""

    key: str
    level: AdminLevel
    name: str
    parents_label: str  # "Province • District • Sector" breadcrumb
    search_text: str  # Normalized name and breadcrumb
    normalized_name: str
    normalized_parents: str
    indices: Tuple[int, ...]  # Aggregated feature positions, in feature order

    @property
    def feature_count(self) -> int:
        return len(self.indices)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "key": self.key,
            "level": self.level.label,
            "name": self.name,
            "parents_label": self.parents_label,
            "feature_count": self.feature_count,
            "indices": list(self.indices),
        }


@dataclass
class SearchResults:
    """
    Ranked search results.

    Iterating yields the ranked entries. ``name_matches`` and
    ``parent_only_matches`` split the same entries by where the text matched.
    """

    query: str
    text: str = ""
    level: Optional[AdminLevel] = None
    entries: List[SearchEntry] = field(default_factory=list)
    name_matches: List[SearchEntry] = field(default_factory=list)
    parent_only_matches: List[SearchEntry] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)

    def __iter__(self) -> Iterator[SearchEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, position: int) -> SearchEntry:
        return self.entries[position]


@dataclass
class RegionStats:
    """Distinct descendant units covered by a search entry."""

    districts: int = 0
    sectors: int = 0
    cells: int = 0
    villages: int = 0

    def count(self, level: AdminLevel) -> int:
        """Count at a level below Province."""
        return {
            AdminLevel.DISTRICT: self.districts,
            AdminLevel.SECTOR: self.sectors,
            AdminLevel.CELL: self.cells,
            AdminLevel.VILLAGE: self.villages,
        }.get(level, 0)

    def rows(self, level: AdminLevel) -> List[Tuple[str, int]]:
        """(label, count) pairs for the levels below ``level``."""
        return [(f"{child.label}s", self.count(child)) for child in level.descendants]


def _parents(feature: Feature) -> Dict[AdminLevel, Tuple[str, str]]:
    """Parent matching key and display label for each level."""
    country = feature.country
    province = feature.level_name(AdminLevel.PROVINCE)
    district = feature.level_name(AdminLevel.DISTRICT)
    sector = feature.level_name(AdminLevel.SECTOR)
    cell = feature.level_name(AdminLevel.CELL)

    def chain(*names: str) -> Tuple[str, str]:
        return PARENT_KEY_SEPARATOR.join(names), PARENT_SEPARATOR.join(names)

    return {
        AdminLevel.PROVINCE: chain(country),
        AdminLevel.DISTRICT: chain(province, country),
        AdminLevel.SECTOR: chain(province, district),
        AdminLevel.CELL: chain(province, district, sector),
        AdminLevel.VILLAGE: chain(province, district, sector, cell),
    }


def entry_key(level: AdminLevel, name: str, parents_key: str) -> str:
    """Composite key of an entry; never the bare name."""
    return f"{level.label}:{normalize_text(name)}|{normalize_text(parents_key)}"


class SearchIndex:
    """
    Deduplicated catalog of named administrative units.

    Each feature contributes one entry per level. Entries are keyed by level,
    normalized name and normalized parent path, because sibling units in
    different parts of the country share names.
    """

    # Results kept after ranking
    MAX_RESULTS = 50

    # Shorter texts are ignored unless a level filter is given
    MIN_QUERY_LENGTH = 2

    def __init__(self, features: Sequence[Feature]):
        """
        Build the catalog from an ordered feature sequence.

        Args:
            features: Features to index; positions are the feature indices
        """
        self._feature_count = len(features)
        self._entries: Dict[str, SearchEntry] = {}
        self._feature_keys: Tuple[Dict[AdminLevel, str], ...] = ()
        self._build(features)

        logger.debug(
            "Built search index: %d features, %d entries (%s)",
            self._feature_count,
            len(self._entries),
            ", ".join(f"{level.label}={n}" for level, n in self.level_counts().items()),
        )

    def _build(self, features: Sequence[Feature]) -> None:
        pending: Dict[str, Dict[str, Any]] = {}
        feature_keys: List[Dict[AdminLevel, str]] = []

        for idx, feature in enumerate(features):
            keys: Dict[AdminLevel, str] = {}
            for level, (parents_key, parents_label) in _parents(feature).items():
                name = feature.level_name(level).strip()
                if not name:
                    continue

                key = entry_key(level, name, parents_key)
                keys[level] = key
                existing = pending.get(key)
                if existing is not None:
                    existing["indices"].append(idx)
                    continue

                pending[key] = {
                    "key": key,
                    "level": level,
                    "name": name,
                    "parents_label": parents_label,
                    "search_text": normalize_text(f"{name} {parents_label}"),
                    "normalized_name": normalize_text(name),
                    "normalized_parents": normalize_text(parents_label),
                    "indices": [idx],
                }
            feature_keys.append(keys)

        self._entries = {
            key: SearchEntry(**{**fields, "indices": tuple(fields["indices"])})
            for key, fields in pending.items()
        }
        self._feature_keys = tuple(feature_keys)

    def entry(self, key: str) -> Optional[SearchEntry]:
        """Look up an entry by its stored key."""
        return self._entries.get(key)

    def entries(self, level: Union[AdminLevel, str, None] = None) -> List[SearchEntry]:
        """All entries in build order, optionally restricted to a level."""
        level = AdminLevel.coerce(level)
        return [e for e in self._entries.values() if level is None or e.level == level]

    def search(
        self,
        query: Optional[str],
        level: Union[AdminLevel, str, None] = None,
    ) -> SearchResults:
        """
        Search entries by name and ancestor names.

        A ":level" prefix in the query restricts the level; an explicit
        ``level`` argument takes precedence over it.

        Ranking: names starting with the text first, then by level (Province
        first), then entries covering fewer features first.

        Args:
            query: Free-text query, optionally with a ":level" prefix
            level: Level filter (AdminLevel, keyword or label)

        Returns:
            SearchResults with at most MAX_RESULTS entries
        """
        parsed = parse_query(query)
        level = AdminLevel.coerce(level) or parsed.level
        text = normalize_text(parsed.text)
        has_text = len(text) >= self.MIN_QUERY_LENGTH

        results = SearchResults(
            query=query or "",
            text=text if has_text else "",
            level=level,
            suggestions=parsed.suggestions,
        )
        if not has_text and level is None:
            return results

        matches = [
            entry
            for entry in self._entries.values()
            if (level is None or entry.level == level)
            and (not has_text or text in entry.search_text)
        ]

        def rank(entry: SearchEntry) -> Tuple[int, int, int]:
            starts = 0
            if has_text and not entry.normalized_name.startswith(text):
                starts = 1
            return (starts, entry.level.order, entry.feature_count)

        matches.sort(key=rank)
        results.entries = matches[: self.MAX_RESULTS]

        for entry in results.entries:
            if not has_text or text in entry.normalized_name:
                results.name_matches.append(entry)
            elif text in entry.normalized_parents:
                results.parent_only_matches.append(entry)
            else:
                # Match spans the name/breadcrumb boundary
                results.name_matches.append(entry)

        return results

    def region_stats(self, entry: SearchEntry) -> RegionStats:
        """Count distinct descendant units among an entry's features."""
        distinct: Dict[AdminLevel, set] = {level: set() for level in entry.level.descendants}
        for idx in entry.indices:
            keys = self._feature_keys[idx]
            for level, found in distinct.items():
                if level in keys:
                    found.add(keys[level])

        return RegionStats(
            districts=len(distinct.get(AdminLevel.DISTRICT, ())),
            sectors=len(distinct.get(AdminLevel.SECTOR, ())),
            cells=len(distinct.get(AdminLevel.CELL, ())),
            villages=len(distinct.get(AdminLevel.VILLAGE, ())),
        )

    def feature_keys(self, index: int) -> Dict[AdminLevel, str]:
        """Entry keys a feature contributes to, by level."""
        return dict(self._feature_keys[index])

    def level_counts(self) -> Dict[AdminLevel, int]:
        """Number of entries per level, root first."""
        counts = Counter(entry.level for entry in self._entries.values())
        return {level: counts.get(level, 0) for level in AdminLevel.ordered()}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


def build_search_index(features: Sequence[Feature]) -> SearchIndex:
    """Build a SearchIndex over an ordered feature sequence."""
    return SearchIndex(features)
