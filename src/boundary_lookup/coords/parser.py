"""Coordinate string parsing (decimal degrees and DMS)."""

import re
from typing import Optional, Tuple

# "-1.94, 29.87", "-1.94;29.87"
DECIMAL_PATTERN = re.compile(
    r"^([-+]?\d+(?:\.\d*)?)\s*[,;]\s*([-+]?\d+(?:\.\d*)?)$"
)

# One DMS half: 1°54'35.2"S, 1° 54' 35.2" S, 1 54 35.2S, 1°54′35.2″S
# Each separator has a single way to consume a run of spaces, so a
# non-matching input fails in linear time.
_DMS_HALF = (
    r"([-+]?\d+)(?:\s*[°º]\s*|\s+)"
    r"(\d+)(?:\s*['′’]\s*|\s+)"
    r"(\d+(?:\.\d*)?)\s*(?:(?:\"|''|″|”)\s*)?"
    r"([NSEW])"
)
DMS_PATTERN = re.compile(rf"^{_DMS_HALF}(?:\s*[,;]\s*|\s*){_DMS_HALF}$", re.IGNORECASE)


class CoordinateParseError(Exception):
    """Error parsing a coordinate string."""

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"Failed to parse coordinates '{text}': {reason}")


def _in_range(lat: float, lon: float) -> bool:
    return -90 <= lat <= 90 and -180 <= lon <= 180


class CoordinateParser:
    """
    Parse coordinate strings into decimal (lat, lon).

    Accepted forms:
    - Decimal degrees: "-1.94, 29.87" or "-1.94;29.87"
    - DMS: "1°54'35.2\"S 30°03'44.9\"E", with optional quotes, spaces in
      place of the degree sign, typographic primes, and either hemisphere
      order (the letters decide the axis)
    """

    def parse(self, text: Optional[str]) -> Tuple[float, float]:
        """
        Parse a coordinate string.

        Args:
            text: Coordinate string

        Returns:
            (lat, lon) in decimal degrees

        Raises:
            CoordinateParseError: If the string matches no grammar or the
                values are out of range
        """
        if text is None or not text.strip():
            raise CoordinateParseError(text or "", "Empty input")

        trimmed = text.strip()

        match = DECIMAL_PATTERN.match(trimmed)
        if match:
            lat, lon = float(match.group(1)), float(match.group(2))
            if not _in_range(lat, lon):
                raise CoordinateParseError(text, "Latitude or longitude out of range")
            return lat, lon

        match = DMS_PATTERN.match(trimmed)
        if match:
            return self._from_dms(text, match.groups())

        raise CoordinateParseError(text, "Unrecognized format")

    def _from_dms(self, text: str, groups: Tuple[str, ...]) -> Tuple[float, float]:
        """Combine two (deg, min, sec, hemisphere) groups into (lat, lon)."""
        lat: Optional[float] = None
        lon: Optional[float] = None

        for deg, minutes, seconds, hemisphere in (groups[:4], groups[4:]):
            hemisphere = hemisphere.upper()
            value = self._dms_value(text, deg, minutes, seconds, hemisphere)
            if hemisphere in "NS":
                if lat is not None:
                    raise CoordinateParseError(text, "Two latitudes given")
                lat = value
            else:
                if lon is not None:
                    raise CoordinateParseError(text, "Two longitudes given")
                lon = value

        assert lat is not None and lon is not None
        if not _in_range(lat, lon):
            raise CoordinateParseError(text, "Latitude or longitude out of range")
        return lat, lon

    @staticmethod
    def _dms_value(text: str, deg: str, minutes: str, seconds: str, hemisphere: str) -> float:
        m, s = float(minutes), float(seconds)
        if m >= 60 or s >= 60:
            raise CoordinateParseError(text, "Minutes and seconds must be below 60")

        magnitude = abs(float(deg)) + m / 60 + s / 3600
        negative = deg.startswith("-") or hemisphere in "SW"
        return -magnitude if negative else magnitude


_parser = CoordinateParser()


def parse_coordinates(text: Optional[str]) -> Optional[Tuple[float, float]]:
    """
    Parse a coordinate string, returning None when it cannot be parsed.

    Args:
        text: "lat, lon" decimal pair or DMS string

    Returns:
        (lat, lon) in decimal degrees, or None
    """
    try:
        return _parser.parse(text)
    except CoordinateParseError:
        return None
