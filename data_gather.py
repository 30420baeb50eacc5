"""
Data Gathering Pipeline for the Address Livability Analyzer
===========================================================

This module resolves a street address and collects the points of interest
around it from OpenStreetMap (OSM).

Main Steps:
1. Geocode the address with Nominatim
2. Fetch amenities around the coordinates from Overpass (via OSMnx)
3. Convert OSM features into Place records for scoring

"""

import sys
import logging
import argparse
from typing import Any, Dict, List, Optional

import osmnx as ox
import geopandas as gpd
import pandas as pd
import requests
# osmnx 2.x only exposes this from its _errors module
from osmnx._errors import InsufficientResponseError

from config import (
    NOMINATIM_URL, USER_AGENT, REQUEST_TIMEOUT_S,
    OVERPASS_SEARCH_RADIUS_M, POI_TAGS, USE_OSM_CACHE, CACHE_DIR,
    LOG_LEVEL, LOG_FORMAT
)
from models import Coordinates, GeocodeResult, LocationData, Place, normalize_tag_key
from utils import validate_coordinates

logger = logging.getLogger(__name__)

# Configure OSMnx
ox.settings.log_console = False
ox.settings.use_cache = USE_OSM_CACHE
ox.settings.cache_folder = CACHE_DIR
ox.settings.http_user_agent = USER_AGENT
ox.settings.requests_timeout = REQUEST_TIMEOUT_S


class AddressNotFoundError(LookupError):
    """Nominatim returned no result for the address."""


class LocationDataError(RuntimeError):
    """Location data could not be fetched or was malformed."""


def place_from_feature(index: Any, row: pd.Series) -> Place:
    """
    Convert one row of an OSMnx features GeoDataFrame into a Place.

    Ways and relations are polygons or lines; their centroid stands in for
    the position.

    Args:
        index: Row index, an (element type, OSM id) pair
        row: Feature row with tag columns and a geometry

    Returns:
        Place instance
    """
    element_type, osm_id = index if isinstance(index, tuple) else ('node', index)

    geometry = row['geometry']
    point = geometry if geometry.geom_type == 'Point' else geometry.centroid

    tags = {}
    for key, value in row.drop(labels=['geometry']).items():
        if isinstance(value, (list, tuple, dict)) or pd.isna(value):
            continue
        tags[normalize_tag_key(key)] = str(value)

    return Place(
        type=str(element_type),
        id=int(osm_id),
        lat=float(point.y),
        lon=float(point.x),
        tags=tags,
    )


class LocationDataGatherer:
    """Resolves addresses and gathers nearby places from OSM."""

    def __init__(self, search_radius_m: int = OVERPASS_SEARCH_RADIUS_M,
                 tags: Optional[Dict[str, Any]] = None,
                 session: Optional[requests.Session] = None):
        """
        Initialize the gatherer.

        Args:
            search_radius_m: Radius of the OSM amenity search (meters)
            tags: OSM tags to query (default: POI_TAGS from config)
            session: HTTP session for Nominatim calls
        """
        self.search_radius_m = search_radius_m
        self.tags = tags if tags is not None else POI_TAGS
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': USER_AGENT})

        logger.info("LocationDataGatherer initialized")

    def geocode_address(self, address: str) -> List[GeocodeResult]:
        """
        Geocode an address with Nominatim.

        Args:
            address: Free-form street address

        Returns:
            List of geocode results (at most one); empty if nothing matched
        """
        if not address or not address.strip():
            raise ValueError("Address is required")

        logger.info(f"Geocoding address: {address}")

        try:
            response = self.session.get(
                NOMINATIM_URL,
                params={
                    'q': address,
                    'format': 'json',
                    'limit': 1,
                    'addressdetails': 1
                },
                timeout=REQUEST_TIMEOUT_S
            )
            response.raise_for_status()
            results = [GeocodeResult.from_nominatim(item) for item in response.json()]
        except requests.RequestException as e:
            logger.error(f"Error geocoding address: {e}")
            raise LocationDataError("Failed to fetch location data") from e
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Malformed geocoding response: {e}")
            raise LocationDataError("Failed to fetch location data") from e

        logger.info(f"Found {len(results)} geocode results")
        return results

    def fetch_nearby_places(self, coordinates: Coordinates) -> List[Place]:
        """
        Fetch amenities around a point from OSM.

        Args:
            coordinates: Search center

        Returns:
            List of places; empty when OSM has nothing in range
        """
        logger.info(
            f"Fetching amenities within {self.search_radius_m} m of "
            f"({coordinates.lat:.6f}, {coordinates.lon:.6f})..."
        )

        try:
            gdf: gpd.GeoDataFrame = ox.features_from_point(
                coordinates.as_tuple(),
                tags=self.tags,
                dist=self.search_radius_m
            )
        except InsufficientResponseError:
            logger.warning("No amenities found around this location")
            return []
        except Exception as e:
            logger.error(f"Error fetching amenities: {e}")
            raise LocationDataError("Failed to fetch location data") from e

        places = [place_from_feature(index, row) for index, row in gdf.iterrows()]

        logger.info(f"Found {len(places)} amenities")
        return places

    def gather(self, address: str) -> LocationData:
        """
        Geocode an address and collect the places around it.

        Args:
            address: Free-form street address

        Returns:
            LocationData with coordinates, geocode results and places
        """
        geocode = self.geocode_address(address)
        if not geocode:
            logger.error(f"Address not found: {address}")
            raise AddressNotFoundError(f"Address not found: {address}")

        try:
            coordinates = geocode[0].coordinates
        except ValueError as e:
            raise LocationDataError(f"Invalid coordinates in geocode result: {e}") from e

        if not validate_coordinates(coordinates.lat, coordinates.lon):
            logger.error(f"Geocoder returned out-of-range coordinates: {coordinates}")
            raise LocationDataError(f"Invalid coordinates in geocode result: {coordinates}")

        places = self.fetch_nearby_places(coordinates)

        return LocationData(coordinates=coordinates, geocode=geocode, places=places)


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    from categories import get_category_icon
    from scoring import build_profile

    parser = argparse.ArgumentParser(description="Score the livability of a street address")
    parser.add_argument('address', help='Street address, e.g. "350 5th Ave, New York, NY"')
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    print("Address Livability Analyzer - Data Gathering Module")
    print("=" * 60)

    gatherer = LocationDataGatherer()
    try:
        location = gatherer.gather(args.address)
    except (AddressNotFoundError, LocationDataError) as e:
        print(f"\n✗ {e}")
        return 1

    profile = build_profile(location.coordinates, location.places)

    print(f"\nLocation: {location.display_name or args.address}")
    print(f"Coordinates: {location.coordinates.lat:.6f}, {location.coordinates.lon:.6f}")
    print(f"Nearby places: {profile.total_places}")

    print(f"\nWalking Score: {profile.walking_score}/100")
    print(f"Driving Score: {profile.driving_score}/100")
    print(f"Urban Index: {profile.urban_index.score:.1f} ({profile.urban_index.type.value})")
    print(f"  {profile.urban_index.description}")

    print("\nAmenities:")
    for category, count in profile.get_category_counts().items():
        print(f"  {get_category_icon(category)} {category}: {count}")

    print(f"\n✓ {profile.active_categories} categories with nearby places")
    return 0


if __name__ == "__main__":
    sys.exit(main())
