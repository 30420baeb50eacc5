"""
Configuration file for the Address Livability Analyzer.
Contains all constants, parameters, and settings for the project.
"""

# External services
NOMINATIM_URL = 'https://nominatim.openstreetmap.org/search'
USER_AGENT = 'Livability-Analyzer/1.0'
REQUEST_TIMEOUT_S = 25

# POI search around the geocoded address (meters)
OVERPASS_SEARCH_RADIUS_M = 1000
POI_TAGS = {
    'amenity': True
}

# osmnx HTTP response cache
USE_OSM_CACHE = True
CACHE_DIR = 'data/cache'

# Scoring radii (in miles)
EARTH_RADIUS_MILES = 3959
WALKING_RADIUS_MILES = 1.0
DRIVING_RADIUS_MILES = 10.0
URBAN_INNER_RADIUS_MILES = 0.5
URBAN_OUTER_RADIUS_MILES = 1.0

# Demo mode: Times Square, New York
DEFAULT_CENTER = (40.7580, -73.9855)
SYNTHETIC_PLACES_FILE = f'{CACHE_DIR}/synthetic_places.json'
SYNTHETIC_PLACE_COUNT = 250
SYNTHETIC_MAX_DISTANCE_MILES = 3.0
RANDOM_STATE = 42

# Visualization Settings
MAP_TILE = 'OpenStreetMap'
MAP_ZOOM = 15
MAX_PLACES_PER_CATEGORY = 4

# Logging
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
