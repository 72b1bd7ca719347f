"""Great-circle distance, bearings and coordinate formatting."""

from __future__ import annotations

import math

Location = tuple[float, float]

EARTH_RADIUS_MILES = 3959.88


def degrees_to_radians(deg: float) -> float:
    """Convert degrees to radians."""
    return math.pi * deg / 180.0


def radians_to_degrees(rad: float) -> float:
    """Convert radians to degrees."""
    return 180.0 * rad / math.pi


def haversine_distance_miles(loc1: Location, loc2: Location) -> float:
    """Return the great-circle distance in miles between two (lat, lon) points."""
    lat1 = degrees_to_radians(loc1[0])
    lat2 = degrees_to_radians(loc2[0])
    lon1 = degrees_to_radians(loc1[1])
    lon2 = degrees_to_radians(loc2[1])
    dlat_sin = math.sin((lat2 - lat1) / 2)
    dlon_sin = math.sin((lon2 - lon1) / 2)
    angle = math.asin(
        math.sqrt(dlat_sin * dlat_sin + math.cos(lat1) * math.cos(lat2) * dlon_sin * dlon_sin)
    )
    return 2 * EARTH_RADIUS_MILES * angle


def calculate_bearing(src: Location, dest: Location) -> float:
    """Return the initial bearing in degrees from src to dest, in (-180, 180]."""
    lat1 = degrees_to_radians(src[0])
    lat2 = degrees_to_radians(dest[0])
    lon1 = degrees_to_radians(src[1])
    lon2 = degrees_to_radians(dest[1])
    x = math.cos(lat2) * math.sin(lon2 - lon1)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(lon2 - lon1)
    return radians_to_degrees(math.atan2(x, y))


def bearing_to_direction(bearing: float) -> str:
    """Map a bearing in degrees to one of the eight compass directions."""
    if bearing >= -22.5:
        if bearing < 67.5:
            return "N" if bearing <= 22.5 else "NE"
        if bearing <= 112.5:
            return "E"
        if bearing <= 157.5:
            return "SE"
        return "S"
    if bearing >= -112.5:
        return "W" if bearing <= -67.5 else "NW"
    if bearing <= -157.5:
        return "S"
    return "SW"


def _dms_part(value: float) -> str:
    magnitude = abs(value)
    degrees = int(magnitude)
    minutes_full = (magnitude - degrees) * 60.0
    minutes = int(minutes_full)
    seconds = (minutes_full - minutes) * 60.0
    if seconds < 0.0005:
        seconds = 0.0
    return f"{degrees}d {minutes}' {seconds:.4g}\""


def convert_ll_to_dms(loc: Location) -> str:
    """Format a (lat, lon) pair as degrees, minutes and seconds with hemispheres."""
    lat, lon = loc
    lat_hemi = "S" if lat < 0.0 else "N"
    lon_hemi = "W" if lon < 0.0 else "E"
    return f"{_dms_part(lat)} {lat_hemi}, {_dms_part(lon)} {lon_hemi}"