"""
Utility functions for the Address Livability Analyzer.

Common helper functions used across the project.
"""

import logging
from typing import Union

import numpy as np

from config import EARTH_RADIUS_MILES

logger = logging.getLogger(__name__)

ArrayLike = Union[float, np.ndarray]


def haversine_distance(lat1: float, lon1: float, lat2: ArrayLike, lon2: ArrayLike) -> ArrayLike:
    """
    Calculate the great circle distance between two points on Earth.

    The second point may be given as numpy arrays, in which case one
    distance per element is returned.

    Args:
        lat1, lon1: Coordinates of first point (degrees)
        lat2, lon2: Coordinates of second point (degrees)

    Returns:
        Distance in miles
    """
    R = EARTH_RADIUS_MILES

    # Convert to radians
    lat1_rad = np.radians(lat1)
    lat2_rad = np.radians(lat2)
    delta_lat = np.radians(np.subtract(lat2, lat1))
    delta_lon = np.radians(np.subtract(lon2, lon1))

    # Haversine formula
    a = np.sin(delta_lat / 2) ** 2 + \
        np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(delta_lon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    distance = R * c

    if np.ndim(distance) == 0:
        return float(distance)
    return distance


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, with .5 always going up.

    Python's built-in round() uses banker's rounding (round(2.5) == 2),
    which would score 2.5 as 2.

    Args:
        value: Non-negative value to round

    Returns:
        Rounded integer
    """
    return int(np.floor(value + 0.5))


def clip_value(value: float, min_val: float, max_val: float) -> float:
    """
    Clip value to a specified range.

    Args:
        value: Value to clip
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clipped value
    """
    return max(min_val, min(max_val, value))


def validate_coordinates(lat: float, lon: float) -> bool:
    """
    Validate if coordinates are within valid ranges.

    Args:
        lat: Latitude
        lon: Longitude

    Returns:
        True if valid, False otherwise (NaN is never valid)
    """
    if not (-90 <= lat <= 90):
        return False
    if not (-180 <= lon <= 180):
        return False
    return True


def format_distance(distance_miles: float) -> str:
    """
    Format distance for display.

    Args:
        distance_miles: Distance in miles

    Returns:
        Formatted string
    """
    if distance_miles < 0.1:
        return f"{distance_miles * 5280:.0f} ft"
    else:
        return f"{distance_miles:.2f} mi"
