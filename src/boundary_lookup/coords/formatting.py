"""Coordinate formatting (DMS and decimal)."""


def decimal_to_dms(value: float, is_latitude: bool) -> str:
    """
    Format decimal degrees as degrees, minutes and seconds.

    Minutes are zero-padded to 2 digits and seconds carry one decimal place.
    Rounding carries into minutes and degrees, so 60.0 seconds never appears.

    Args:
        value: Decimal degrees
        is_latitude: True for N/S, False for E/W

    Returns:
        Formatted string like 1°54'35.2"S or 30°03'44.9"E
    """
    if is_latitude:
        direction = "N" if value >= 0 else "S"
    else:
        direction = "E" if value >= 0 else "W"

    # Work in tenths of an arc-second
    tenths = round(abs(value) * 36000)
    degrees, remainder = divmod(tenths, 36000)
    minutes, seconds_tenths = divmod(remainder, 600)

    return f"{degrees}°{minutes:02d}'{seconds_tenths / 10:.1f}\"{direction}"


def format_dms(lat: float, lon: float) -> str:
    """Format a coordinate pair, e.g. 1°54'35.2"S 30°03'44.9"E."""
    return f"{decimal_to_dms(lat, True)} {decimal_to_dms(lon, False)}"


def format_decimal(lat: float, lon: float, precision: int = 6) -> str:
    """Format a coordinate pair as "lat, lon"."""
    return f"{lat:.{precision}f}, {lon:.{precision}f}"
