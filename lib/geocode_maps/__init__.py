"""
Geocode Maps API Client Library

Async client for the Geocode Maps API (geocode.maps.co): free-text place
search and reverse geocoding with type-safe responses.

Example usage:
    from lib.geocode_maps import GeocodeMapsClient

    client = GeocodeMapsClient(apiKey="your_api_key")

    # Forward geocoding
    results = await client.search("100 main st, austin")

    # Reverse geocoding
    location = await client.reverse(30.2672, -97.7431)
"""

from lib.geocode_maps.client import GeocodeMapsClient
from lib.geocode_maps.models import (
    Address,
    ReverseError,
    ReverseResponse,
    ReverseResult,
    SearchResponse,
    SearchResult,
)

__all__ = [
    "GeocodeMapsClient",
    "Address",
    "SearchResult",
    "ReverseResult",
    "ReverseError",
    "SearchResponse",
    "ReverseResponse",
]
