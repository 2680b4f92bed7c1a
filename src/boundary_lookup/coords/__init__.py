"""Coordinate parsing and formatting."""

from boundary_lookup.coords.formatting import decimal_to_dms, format_decimal, format_dms
from boundary_lookup.coords.parser import (
    CoordinateParseError,
    CoordinateParser,
    parse_coordinates,
)

__all__ = [
    "CoordinateParser",
    "CoordinateParseError",
    "parse_coordinates",
    "decimal_to_dms",
    "format_dms",
    "format_decimal",
]
