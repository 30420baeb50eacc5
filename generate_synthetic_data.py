"""
Generate synthetic places for when Nominatim/Overpass are unavailable.
This allows exploring the scores and the results view without external API calls.
"""
import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np

from config import (
    DEFAULT_CENTER, SYNTHETIC_PLACES_FILE, SYNTHETIC_PLACE_COUNT,
    SYNTHETIC_MAX_DISTANCE_MILES, RANDOM_STATE, LOG_LEVEL, LOG_FORMAT
)
from models import Coordinates, Place

logger = logging.getLogger(__name__)

MILES_PER_DEGREE_LAT = 69.0

# (tag key, value) pairs drawn for synthetic places; includes a few values
# that no scorer or category recognizes
SYNTHETIC_TAGS = [
    ('amenity', 'restaurant'),
    ('amenity', 'cafe'),
    ('amenity', 'fast_food'),
    ('amenity', 'bar'),
    ('amenity', 'pharmacy'),
    ('amenity', 'hospital'),
    ('amenity', 'school'),
    ('amenity', 'library'),
    ('amenity', 'bank'),
    ('amenity', 'atm'),
    ('amenity', 'bus_station'),
    ('amenity', 'parking'),
    ('amenity', 'cinema'),
    ('amenity', 'bench'),
    ('amenity', 'toilets'),
    ('shop', 'supermarket'),
    ('shop', 'convenience'),
    ('shop', 'clothes'),
    ('leisure', 'park'),
    ('leisure', 'playground'),
]

STREET_NAMES = ['Main Street', 'Oak Avenue', 'Park Place', 'Elm Street', 'Broadway']


def generate_synthetic_places(center: Optional[Coordinates] = None,
                              n_places: int = SYNTHETIC_PLACE_COUNT,
                              max_distance_miles: float = SYNTHETIC_MAX_DISTANCE_MILES,
                              seed: int = RANDOM_STATE) -> List[Place]:
    """
    Scatter random places uniformly over a disc around a center.

    Args:
        center: Disc center (default: DEFAULT_CENTER from config)
        n_places: Number of places to create
        max_distance_miles: Disc radius in miles
        seed: Random seed; the same seed always gives the same places

    Returns:
        List of synthetic places
    """
    if center is None:
        center = Coordinates(*DEFAULT_CENTER)

    logger.info(f"Creating {n_places} synthetic places within {max_distance_miles} mi...")

    rng = np.random.default_rng(seed)

    # sqrt keeps the density uniform over the disc area
    distances = max_distance_miles * np.sqrt(rng.uniform(0, 1, n_places))
    bearings = rng.uniform(0, 2 * np.pi, n_places)
    tag_indices = rng.integers(0, len(SYNTHETIC_TAGS), n_places)

    miles_per_degree_lon = MILES_PER_DEGREE_LAT * np.cos(np.radians(center.lat))
    lats = center.lat + distances * np.cos(bearings) / MILES_PER_DEGREE_LAT
    lons = center.lon + distances * np.sin(bearings) / miles_per_degree_lon

    places = []
    for i in range(n_places):
        key, value = SYNTHETIC_TAGS[tag_indices[i]]
        tags = {
            key: value,
            'name': f"Test {value.replace('_', ' ')} {i}",
        }
        if i % 3 == 0:
            tags['addr_street'] = STREET_NAMES[i % len(STREET_NAMES)]
            tags['addr_housenumber'] = str(100 + i)

        places.append(Place(
            type='node',
            id=i + 1,
            lat=float(lats[i]),
            lon=float(lons[i]),
            tags=tags,
        ))

    logger.info(f"Created {len(places)} synthetic places")
    return places


def save_synthetic_places(places: Sequence[Place], path: str = SYNTHETIC_PLACES_FILE) -> Path:
    """Write places to a JSON file of Overpass-style elements."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump([place.to_element() for place in places], f, indent=2)

    logger.info(f"Saved {len(places)} places to {output_path}")
    return output_path


def load_places(path: str = SYNTHETIC_PLACES_FILE) -> List[Place]:
    """Read places from a JSON file of Overpass-style elements."""
    with open(path, 'r', encoding='utf-8') as f:
        elements = json.load(f)

    places = [Place.from_element(element) for element in elements]
    logger.info(f"Loaded {len(places)} places from {path}")
    return places


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    save_synthetic_places(generate_synthetic_places())
