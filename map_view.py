"""
Map rendering for the results view.

Tag values come straight from OpenStreetMap and are escaped before they
are placed in popup HTML.
"""

import html
import math
from typing import Sequence
from urllib.parse import urlparse

import folium

from config import MAP_TILE, MAP_ZOOM
from models import Coordinates, Place
from utils import format_distance, haversine_distance

AMENITY_COLORS = {
    'restaurant': '#ff6b6b',
    'cafe': '#4ecdc4',
    'shop': '#45b7d1',
    'bank': '#96ceb4',
    'hospital': '#feca57',
    'school': '#ff9ff3',
    'fuel': '#54a0ff'
}
DEFAULT_COLOR = '#718096'

SAFE_URL_SCHEMES = frozenset(['http', 'https'])


def amenity_color(place: Place) -> str:
    """Marker color for a place, keyed by amenity (any shop counts as 'shop')."""
    if place.amenity in AMENITY_COLORS:
        return AMENITY_COLORS[place.amenity]
    if place.shop:
        return AMENITY_COLORS['shop']
    return DEFAULT_COLOR


def is_safe_url(url: str) -> bool:
    """Only plain web links are rendered as anchors."""
    return urlparse(url.strip()).scheme.lower() in SAFE_URL_SCHEMES


def place_popup_html(place: Place, center: Coordinates) -> str:
    """
    Popup body for a place marker.

    Args:
        place: Place shown by the marker
        center: Searched location, for the distance line

    Returns:
        HTML fragment with every tag value escaped
    """
    name = place.tag('name') or place.amenity or 'Unnamed Place'
    distance = haversine_distance(center.lat, center.lon, place.lat, place.lon)

    lines = [
        f"<strong>{html.escape(name)}</strong>",
        f"<span>Type: {html.escape(place.amenity or 'Unknown')}</span>",
        f"<span>{format_distance(distance)} away</span>",
    ]
    if place.street_address:
        lines.append(f"<span>Address: {html.escape(place.street_address)}</span>")
    if place.tag('phone'):
        lines.append(f"<span>Phone: {html.escape(place.tag('phone'))}</span>")

    website = place.tag('website')
    if website and is_safe_url(website):
        lines.append(
            f'<a href="{html.escape(website, quote=True)}" target="_blank" '
            f'rel="noopener noreferrer">Website</a>'
        )

    return '<div style="font-family: Arial; width: 220px;">' + '<br>'.join(lines) + '</div>'


def build_map(center: Coordinates, places: Sequence[Place]) -> folium.Map:
    """Map with the searched location and one marker per place."""
    m = folium.Map(
        location=center.as_tuple(),
        zoom_start=MAP_ZOOM,
        tiles=MAP_TILE
    )

    folium.Marker(
        center.as_tuple(),
        popup=folium.Popup(
            f"<strong>Searched Location</strong><br>{center.lat:.6f}, {center.lon:.6f}",
            max_width=250
        ),
        icon=folium.Icon(color='blue', icon='home')
    ).add_to(m)

    for place in places:
        # Skip places without a usable position
        if not (math.isfinite(place.lat) and math.isfinite(place.lon)):
            continue

        color = amenity_color(place)
        folium.CircleMarker(
            location=(place.lat, place.lon),
            radius=6,
            color=color,
            fill=True,
            fill_color=color,
            fill_opacity=0.8,
            popup=folium.Popup(place_popup_html(place, center), max_width=260),
            tooltip=html.escape(place.display_name)
        ).add_to(m)

    return m
