"""Hierarchical name search."""

from boundary_lookup.search.index import (
    RegionStats,
    SearchEntry,
    SearchIndex,
    SearchResults,
    build_search_index,
)
from boundary_lookup.search.normalizer import normalize_text
from boundary_lookup.search.query import ParsedQuery, complete_query, parse_query

__all__ = [
    "SearchIndex",
    "SearchEntry",
    "SearchResults",
    "RegionStats",
    "build_search_index",
    "normalize_text",
    "ParsedQuery",
    "parse_query",
    "complete_query",
]
