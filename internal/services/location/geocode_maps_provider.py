"""
Place lookup and reverse geocoding backed by Geocode Maps API, dood!
"""

import logging
from typing import List, Optional

from lib.geocode_maps import Address as GeoAddress
from lib.geocode_maps import GeocodeMapsClient, SearchResult

from .errors import GeocodeError, PlaceLookupError
from .models import Coordinate, PlaceResult, ReverseCandidate

logger = logging.getLogger(__name__)

# Most specific first
LOCALITY_KEYS = ("city", "town", "village", "hamlet", "suburb")


def _nonEmpty(value: Optional[str]) -> Optional[str]:
    return value if value else None


def getLocality(address: GeoAddress) -> Optional[str]:
    for key in LOCALITY_KEYS:
        value = address.get(key)
        if value:
            return value
    return None


def toPlaceResult(item: SearchResult) -> Optional[PlaceResult]:
    """Convert search hit, None if it has no usable coordinates"""
    try:
        coordinate = Coordinate(float(item["lat"]), float(item["lon"]))
    except (KeyError, TypeError, ValueError) as e:
        logger.debug(f"Skipping search result {item.get('place_id')} with bad coordinates: {e}")
        return None

    address = item.get("address", {})
    return PlaceResult(
        coordinate=coordinate,
        name=_nonEmpty(item.get("name")) or _nonEmpty(item.get("display_name")),
        locality=getLocality(address),
    )


class GeocodeMapsPlaceProvider:
    """PlaceLookupProvider and ReverseGeocodeProvider over GeocodeMapsClient"""

    def __init__(self, client: GeocodeMapsClient, searchLimit: int = 10):
        self.client = client
        self.searchLimit = searchLimit

    async def searchPlaces(self, query: str) -> List[PlaceResult]:
        response = await self.client.search(query, limit=self.searchLimit)
        if response is None:
            raise PlaceLookupError(f"Place search for {query!r} failed")

        places = [place for place in map(toPlaceResult, response) if place is not None]
        logger.debug(f"Search {query!r}: {len(places)} places of {len(response)} results")
        return places

    async def reverseGeocode(self, coordinate: Coordinate) -> List[ReverseCandidate]:
        response = await self.client.reverse(coordinate.latitude, coordinate.longitude)
        if response is None:
            raise GeocodeError(f"Reverse geocoding of {coordinate} failed")

        if "error" in response:
            logger.debug(f"Nothing found at {coordinate}: {response['error']}")
            return []

        address: GeoAddress = response.get("address", {})
        return [
            ReverseCandidate(
                name=_nonEmpty(response.get("name")),
                locality=getLocality(address),
                administrativeArea=_nonEmpty(address.get("state")),
                country=_nonEmpty(address.get("country")),
                thoroughfare=_nonEmpty(address.get("road")),
                postalCode=_nonEmpty(address.get("postcode")),
            )
        ]
