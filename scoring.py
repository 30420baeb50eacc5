"""
Livability scoring for the Address Livability Analyzer.

Walking, driving and urban density scores are pure functions of a center
point and a list of places. Each calculator re-scans the full place list
on its own; none of them depends on another's result.
"""

import logging
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence

import numpy as np

from categories import categorize_amenities
from config import (
    WALKING_RADIUS_MILES, DRIVING_RADIUS_MILES,
    URBAN_INNER_RADIUS_MILES, URBAN_OUTER_RADIUS_MILES
)
from models import Coordinates, LivabilityProfile, Place, UrbanIndexResult, UrbanType
from utils import haversine_distance, round_half_up

logger = logging.getLogger(__name__)

MAX_SCORE = 100

# Walking weights favour everyday errands reachable on foot
WALKING_WEIGHTS = MappingProxyType({
    'restaurant': 3,
    'cafe': 2,
    'grocery': 5,
    'pharmacy': 4,
    'bank': 2,
    'gym': 3,
    'school': 2,
    'hospital': 4,
    'public_transport': 5
})
WALKING_SHOP_TYPES = frozenset(['supermarket', 'grocery'])
WALKING_SHOP_BONUS = 5
WALKING_BASE_SCORE = 1
WALKING_DIVISOR = 2

# Driving covers a radius ten times larger, so each place counts for less
DRIVING_WEIGHTS = MappingProxyType({
    'restaurant': 1,
    'cafe': 1,
    'grocery': 3,
    'pharmacy': 2,
    'bank': 1,
    'gym': 1,
    'school': 1,
    'hospital': 3,
    'shopping_mall': 4,
    'entertainment': 2
})
DRIVING_SHOP_TYPES = frozenset(['supermarket', 'mall'])
DRIVING_SHOP_BONUS = 3
DRIVING_BASE_SCORE = 0.5
DRIVING_DIVISOR = 3

# Urban index indicators (counted over the whole place list)
FOOD_AMENITIES = frozenset(['restaurant', 'cafe', 'bar', 'pub', 'fast_food'])
TRANSIT_AMENITIES = frozenset(['bus_station', 'subway_entrance', 'taxi'])

URBAN_THRESHOLD = 100
SUBURBAN_THRESHOLD = 30

EMPTY_AREA_DESCRIPTION = 'Very low amenity density'
URBAN_DESCRIPTION = 'High density of amenities and services'
SUBURBAN_DESCRIPTION = 'Moderate amenity density with good accessibility'
RURAL_DESCRIPTION = 'Lower density, more spread out amenities'


def places_within_radius(center: Coordinates, places: Sequence[Place],
                         radius_miles: float) -> List[Place]:
    """
    Select places within a radius of the center (inclusive).

    Places with NaN coordinates never match.

    Args:
        center: Search center
        places: Candidate places
        radius_miles: Search radius in miles

    Returns:
        Matching places in input order
    """
    if not places:
        return []

    lats = np.array([place.lat for place in places], dtype=float)
    lons = np.array([place.lon for place in places], dtype=float)
    distances = haversine_distance(center.lat, center.lon, lats, lons)

    return [place for place, distance in zip(places, distances) if distance <= radius_miles]


def _weighted_sum(places: Sequence[Place], weights: Mapping[str, float],
                  shop_types: frozenset, shop_bonus: float, base_score: float) -> float:
    """
    Add up per-place contributions.

    A weighted amenity wins over the shop bonus, which wins over the
    baseline credit for any other amenity or shop tag. Untagged places
    contribute nothing.
    """
    total = 0
    for place in places:
        amenity = place.amenity
        shop = place.shop

        if amenity in weights:
            total += weights[amenity]
        elif shop in shop_types:
            total += shop_bonus
        elif amenity or shop:
            total += base_score

    return total


def calculate_walking_score(center: Optional[Coordinates], places: Sequence[Place]) -> int:
    """
    Calculate the walking score from amenities within one mile.

    Args:
        center: Location being scored
        places: Nearby places

    Returns:
        Walking score from 0 to 100
    """
    if center is None or not places:
        return 0

    nearby = places_within_radius(center, places, WALKING_RADIUS_MILES)
    total = _weighted_sum(
        nearby, WALKING_WEIGHTS, WALKING_SHOP_TYPES, WALKING_SHOP_BONUS, WALKING_BASE_SCORE
    )
    logger.debug(f"Walking: {len(nearby)} places within {WALKING_RADIUS_MILES} mi, sum {total}")

    return min(MAX_SCORE, round_half_up(total / WALKING_DIVISOR))


def calculate_driving_score(center: Optional[Coordinates], places: Sequence[Place]) -> int:
    """
    Calculate the driving score from amenities within ten miles.

    Args:
        center: Location being scored
        places: Nearby places

    Returns:
        Driving score from 0 to 100
    """
    if center is None or not places:
        return 0

    nearby = places_within_radius(center, places, DRIVING_RADIUS_MILES)
    total = _weighted_sum(
        nearby, DRIVING_WEIGHTS, DRIVING_SHOP_TYPES, DRIVING_SHOP_BONUS, DRIVING_BASE_SCORE
    )
    logger.debug(f"Driving: {len(nearby)} places within {DRIVING_RADIUS_MILES} mi, sum {total}")

    return min(MAX_SCORE, round_half_up(total / DRIVING_DIVISOR))


def calculate_density_score(center: Coordinates, places: Sequence[Place]) -> float:
    """
    Composite density used by the urban index.

    Places within half a mile are counted again on top of the one-mile
    count, and food and transit amenities add extra weight wherever they
    are in the list.
    """
    one_mile = len(places_within_radius(center, places, URBAN_OUTER_RADIUS_MILES))
    half_mile = len(places_within_radius(center, places, URBAN_INNER_RADIUS_MILES))
    restaurants = sum(1 for place in places if place.amenity in FOOD_AMENITIES)
    public_transport = sum(1 for place in places if place.amenity in TRANSIT_AMENITIES)

    logger.debug(
        f"Urban counts: half_mile={half_mile}, one_mile={one_mile}, "
        f"restaurants={restaurants}, public_transport={public_transport}"
    )
    return (half_mile * 2) + one_mile + (restaurants * 1.5) + (public_transport * 2)


def calculate_urban_index(center: Optional[Coordinates], places: Sequence[Place]) -> UrbanIndexResult:
    """
    Classify a location as Urban, Suburban or Rural.

    Only the Urban tier caps its score at 100; Suburban and Rural report
    the raw density score.

    Args:
        center: Location being scored
        places: Nearby places

    Returns:
        UrbanIndexResult with type, score, and description
    """
    if center is None or not places:
        return UrbanIndexResult(UrbanType.RURAL, 0, EMPTY_AREA_DESCRIPTION)

    density_score = calculate_density_score(center, places)

    if density_score >= URBAN_THRESHOLD:
        return UrbanIndexResult(UrbanType.URBAN, min(MAX_SCORE, density_score), URBAN_DESCRIPTION)
    elif density_score >= SUBURBAN_THRESHOLD:
        return UrbanIndexResult(UrbanType.SUBURBAN, density_score, SUBURBAN_DESCRIPTION)
    else:
        return UrbanIndexResult(UrbanType.RURAL, density_score, RURAL_DESCRIPTION)


def build_profile(center: Coordinates, places: Sequence[Place]) -> LivabilityProfile:
    """
    Run every calculator on the same input and bundle the results.

    Args:
        center: Location being scored
        places: Nearby places

    Returns:
        LivabilityProfile for the results view
    """
    profile = LivabilityProfile(
        coordinates=center,
        walking_score=calculate_walking_score(center, places),
        driving_score=calculate_driving_score(center, places),
        urban_index=calculate_urban_index(center, places),
        categories=categorize_amenities(places),
        total_places=len(places),
    )
    logger.info(
        f"Profile: walking={profile.walking_score}, driving={profile.driving_score}, "
        f"urban={profile.urban_index.type.value} ({profile.urban_index.score:.1f})"
    )
    return profile
