"""
Data model for the Address Livability Analyzer.

Places and coordinates are built fresh for every lookup and are never
mutated while scores are being calculated.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True)
class Coordinates:
    """A WGS84 latitude/longitude pair in degrees."""
    lat: float
    lon: float

    def as_tuple(self) -> tuple:
        return (self.lat, self.lon)


def normalize_tag_key(key: str) -> str:
    """Map OSM namespaced keys such as 'addr:street' to 'addr_street'."""
    return str(key).replace(':', '_')


@dataclass(frozen=True)
class Place:
    """A point of interest with its OSM tags."""
    type: str
    id: int
    lat: float
    lon: float
    tags: Mapping[str, str] = field(default_factory=dict)

    def tag(self, key: str) -> str:
        """Return a tag value, or an empty string when the tag is missing."""
        return self.tags.get(key) or ''

    @property
    def amenity(self) -> str:
        return self.tag('amenity')

    @property
    def shop(self) -> str:
        return self.tag('shop')

    @property
    def leisure(self) -> str:
        return self.tag('leisure')

    @property
    def display_name(self) -> str:
        return self.tag('name') or self.amenity or 'Unnamed'

    @property
    def street_address(self) -> str:
        street = self.tag('addr_street')
        housenumber = self.tag('addr_housenumber')
        if street and housenumber:
            return f"{street} {housenumber}"
        return street

    @classmethod
    def from_element(cls, element: Dict[str, Any]) -> 'Place':
        """
        Build a Place from an Overpass JSON element.

        Nodes carry 'lat'/'lon' directly; ways and relations requested
        with 'out center' carry them under 'center'. Elements with no
        position at all get NaN coordinates and so never fall inside
        any search radius.

        Args:
            element: Overpass element dict

        Returns:
            Place instance
        """
        position = element
        if 'lat' not in element and 'center' in element:
            position = element['center']

        tags = {
            normalize_tag_key(key): str(value)
            for key, value in (element.get('tags') or {}).items()
        }

        return cls(
            type=element.get('type', 'node'),
            id=int(element.get('id', 0)),
            lat=float(position.get('lat', float('nan'))),
            lon=float(position.get('lon', float('nan'))),
            tags=tags,
        )

    def to_element(self) -> Dict[str, Any]:
        """Serialize back to an Overpass-style element dict."""
        return {
            'type': self.type,
            'id': self.id,
            'lat': self.lat,
            'lon': self.lon,
            'tags': dict(self.tags),
        }


@dataclass(frozen=True)
class GeocodeResult:
    """One Nominatim search hit."""
    place_id: int
    licence: str
    lat: str
    lon: str
    display_name: str
    address: Mapping[str, str] = field(default_factory=dict)

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(lat=float(self.lat), lon=float(self.lon))

    @classmethod
    def from_nominatim(cls, data: Dict[str, Any]) -> 'GeocodeResult':
        return cls(
            place_id=int(data.get('place_id', 0)),
            licence=data.get('licence', ''),
            lat=str(data['lat']),
            lon=str(data['lon']),
            display_name=data.get('display_name', ''),
            address=dict(data.get('address') or {}),
        )


class UrbanType(str, Enum):
    URBAN = 'Urban'
    SUBURBAN = 'Suburban'
    RURAL = 'Rural'


@dataclass(frozen=True)
class UrbanIndexResult:
    """Urban/Suburban/Rural classification with its density score."""
    type: UrbanType
    score: float
    description: str


@dataclass
class LocationData:
    """Geocoded address plus the places found around it."""
    coordinates: Coordinates
    geocode: List[GeocodeResult]
    places: List[Place]

    @property
    def display_name(self) -> Optional[str]:
        if self.geocode:
            return self.geocode[0].display_name
        return None


@dataclass
class LivabilityProfile:
    """All scores and the amenity breakdown for one location."""
    coordinates: Coordinates
    walking_score: int
    driving_score: int
    urban_index: UrbanIndexResult
    categories: Dict[str, List[Place]]
    total_places: int

    @property
    def active_categories(self) -> int:
        """Number of categories with at least one place."""
        return sum(1 for places in self.categories.values() if places)

    def get_category_counts(self) -> Dict[str, int]:
        return {name: len(places) for name, places in self.categories.items()}
