"""
Amenity categorization for the Address Livability Analyzer.

Every place lands in exactly one of eight fixed categories. Rules are
checked in order and the first match wins, so a place tagged both
amenity=cafe and shop=books is Food & Drink, never Shopping.
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Sequence, Tuple

from models import Place

logger = logging.getLogger(__name__)


class Category(str, Enum):
    FOOD_AND_DRINK = 'Food & Drink'
    SHOPPING = 'Shopping'
    HEALTHCARE = 'Healthcare'
    EDUCATION = 'Education'
    TRANSPORTATION = 'Transportation'
    ENTERTAINMENT = 'Entertainment'
    SERVICES = 'Services'
    OTHER = 'Other'


# (category, {tag key: accepted values}); a place matches a rule when any
# of its listed tags holds one of the accepted values
CategoryRule = Tuple[Category, Mapping[str, FrozenSet[str]]]

CATEGORY_RULES: Tuple[CategoryRule, ...] = (
    (Category.FOOD_AND_DRINK, {
        'amenity': frozenset(['restaurant', 'cafe', 'bar', 'pub', 'fast_food', 'ice_cream']),
    }),
    (Category.SHOPPING, {
        'shop': frozenset(['supermarket', 'grocery', 'convenience', 'clothes', 'electronics', 'books']),
        'amenity': frozenset(['marketplace', 'shopping']),
    }),
    (Category.HEALTHCARE, {
        'amenity': frozenset(['hospital', 'clinic', 'pharmacy', 'dentist', 'veterinary']),
    }),
    (Category.EDUCATION, {
        'amenity': frozenset(['school', 'university', 'college', 'kindergarten', 'library']),
    }),
    (Category.TRANSPORTATION, {
        'amenity': frozenset(['bus_station', 'taxi', 'fuel', 'parking']),
    }),
    (Category.ENTERTAINMENT, {
        'amenity': frozenset(['cinema', 'theatre', 'casino', 'nightclub']),
        'leisure': frozenset(['park', 'playground', 'sports_centre', 'swimming_pool']),
    }),
    (Category.SERVICES, {
        'amenity': frozenset(['bank', 'atm', 'post_office', 'police', 'fire_station']),
    }),
)

CATEGORY_ICONS = MappingProxyType({
    Category.FOOD_AND_DRINK.value: '🍽️',
    Category.SHOPPING.value: '🛍️',
    Category.HEALTHCARE.value: '🏥',
    Category.EDUCATION.value: '🎓',
    Category.TRANSPORTATION.value: '🚌',
    Category.ENTERTAINMENT.value: '🎭',
    Category.SERVICES.value: '🏛️',
    Category.OTHER.value: '📍',
})

DEFAULT_ICON = '📍'


def classify_place(place: Place) -> Category:
    """
    Find the category for a single place.

    Args:
        place: Place to classify

    Returns:
        The first category whose rule matches, or Category.OTHER
    """
    for category, accepted in CATEGORY_RULES:
        if any(place.tag(key) in values for key, values in accepted.items()):
            return category
    return Category.OTHER


def categorize_amenities(places: Sequence[Place]) -> Dict[str, List[Place]]:
    """
    Partition places into the eight amenity categories.

    All category names are present in the result, in display order, even
    when no place falls into them. Places keep their input order inside
    each category.

    Args:
        places: Places to categorize

    Returns:
        Dictionary mapping category names to lists of places
    """
    categorized = {category.value: [] for category in Category}

    for place in places:
        categorized[classify_place(place).value].append(place)

    counts = {name: len(members) for name, members in categorized.items()}
    logger.debug(f"Categorized {len(places)} places: {counts}")
    return categorized


def get_category_icon(category: str) -> str:
    """Return the display glyph for a category name."""
    return CATEGORY_ICONS.get(category, DEFAULT_ICON)
