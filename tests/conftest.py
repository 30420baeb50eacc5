"""
Shared fixtures for the livability tests.
"""

import math

import pytest

from config import EARTH_RADIUS_MILES
from models import Coordinates, Place

MILES_PER_DEGREE = EARTH_RADIUS_MILES * math.pi / 180


def north_of(center: Coordinates, miles: float) -> Coordinates:
    """Point due north of center, the given great-circle distance away."""
    return Coordinates(center.lat + miles / MILES_PER_DEGREE, center.lon)


@pytest.fixture
def center():
    return Coordinates(40.0, -73.0)


@pytest.fixture
def make_place(center):
    """
    Factory for places; by default placed on the center.

    Usage: make_place(amenity='cafe', miles=0.75)
    """
    counter = {'id': 0}

    def _make(miles: float = 0.0, **tags) -> Place:
        counter['id'] += 1
        position = north_of(center, miles)
        return Place(
            type='node',
            id=counter['id'],
            lat=position.lat,
            lon=position.lon,
            tags=tags,
        )

    return _make
