"""
Geocode Maps API Data Models

TypedDict models for the `search` and `reverse` responses of the Geocode Maps
API (geocode.maps.co), which follows the Nominatim `jsonv2` format.
"""

import sys
from typing import List, NotRequired

if sys.version_info >= (3, 14):
    from typing import TypedDict
else:
    from typing_extensions import TypedDict


class Address(TypedDict, total=False, closed=False):
    """Structured address components, dood!

    All fields are optional: which ones are present depends on the place.
    """

    house_number: str  # Building number
    road: str  # Street name
    neighbourhood: str  # Neighbourhood/district
    suburb: str  # Suburb name
    hamlet: str  # Hamlet name
    village: str  # Village name
    town: str  # Town name
    city: str  # City name
    county: str  # County name
    state: str  # State/region name
    postcode: str  # Postal code
    country: str  # Country name
    country_code: str  # ISO country code (e.g., "us")
    amenity: str  # Amenity name (if applicable)


class SearchResult(TypedDict):
    """Single result from /search endpoint, dood!"""

    place_id: int
    licence: str
    osm_type: str  # node/way/relation
    osm_id: int
    lat: str  # Latitude (string in API response)
    lon: str  # Longitude (string in API response)
    category: str
    type: str
    place_rank: int
    importance: float
    addresstype: str
    name: str
    display_name: str
    address: NotRequired[Address]  # Only with addressdetails=1
    boundingbox: List[str]  # [min_lat, max_lat, min_lon, max_lon]


class ReverseResult(TypedDict):
    """Result from /reverse endpoint, dood!"""

    place_id: int
    licence: str
    osm_type: str
    osm_id: int
    lat: str
    lon: str
    category: str
    type: str
    place_rank: int
    importance: float
    addresstype: str
    name: str
    display_name: str
    address: NotRequired[Address]
    boundingbox: List[str]


class ReverseError(TypedDict):
    """Body returned by /reverse when nothing is found at the coordinates"""

    error: str  # e.g. "Unable to geocode"


SearchResponse = List[SearchResult]
ReverseResponse = ReverseResult | ReverseError
