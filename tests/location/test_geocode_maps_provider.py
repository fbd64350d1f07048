"""
Tests for GeocodeMapsPlaceProvider conversion of Geocode Maps responses.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from internal.services.location import (
    Coordinate,
    GeocodeError,
    GeocodeMapsPlaceProvider,
    PlaceLookupError,
    PlaceResult,
    ReverseCandidate,
)
from internal.services.location.geocode_maps_provider import getLocality, toPlaceResult
from lib.geocode_maps import GeocodeMapsClient


def makeSearchItem(name="Main St Clinic", lat="30.2672", lon="-97.7431", **address) -> dict:
    return {
        "place_id": 1,
        "lat": lat,
        "lon": lon,
        "name": name,
        "display_name": f"{name}, Austin, Texas, United States",
        "address": address or {"city": "Austin", "state": "Texas"},
    }


@pytest.fixture
def mockClient() -> MagicMock:
    client = MagicMock(spec=GeocodeMapsClient)
    client.search = AsyncMock()
    client.reverse = AsyncMock()
    return client


@pytest.fixture
def provider(mockClient) -> GeocodeMapsPlaceProvider:
    return GeocodeMapsPlaceProvider(mockClient, searchLimit=5)


class TestHelpers:
    """Test locality lookup and search hit conversion"""

    @pytest.mark.parametrize(
        "address, expected",
        [
            ({"city": "Austin", "town": "Other"}, "Austin"),
            ({"town": "Marfa"}, "Marfa"),
            ({"village": "Luckenbach", "suburb": "X"}, "Luckenbach"),
            ({"suburb": "Hyde Park"}, "Hyde Park"),
            ({"city": "", "town": "Marfa"}, "Marfa"),
            ({"state": "Texas"}, None),
        ],
    )
    def testGetLocality(self, address, expected):
        assert getLocality(address) == expected

    def testToPlaceResult(self):
        place = toPlaceResult(makeSearchItem())

        assert place == PlaceResult(coordinate=Coordinate(30.2672, -97.7431), name="Main St Clinic", locality="Austin")

    def testNameFallsBackToDisplayName(self):
        item = makeSearchItem(name="")

        place = toPlaceResult(item)

        assert place.name == item["display_name"]

    @pytest.mark.parametrize("lat, lon", [("abc", "1"), ("95.0", "1"), ("1", "181"), (None, "1")])
    def testBadCoordinatesSkipped(self, lat, lon):
        assert toPlaceResult(makeSearchItem(lat=lat, lon=lon)) is None

    def testMissingAddress(self):
        item = makeSearchItem()
        del item["address"]

        place = toPlaceResult(item)

        assert place.locality is None


class TestSearchPlaces:
    """Test searchPlaces()"""

    async def testResultsConvertedInOrder(self, provider, mockClient):
        mockClient.search.return_value = [
            makeSearchItem(name="Second Clinic"),
            makeSearchItem(name="Broken", lat="nope"),
            makeSearchItem(name="First Clinic", town="Round Rock"),
        ]

        places = await provider.searchPlaces("clinic")

        assert [place.name for place in places] == ["Second Clinic", "First Clinic"]
        assert places[1].locality == "Round Rock"
        mockClient.search.assert_awaited_once_with("clinic", limit=5)

    async def testEmptyResponse(self, provider, mockClient):
        mockClient.search.return_value = []

        assert await provider.searchPlaces("nowhere") == []

    async def testClientFailureRaises(self, provider, mockClient):
        mockClient.search.return_value = None

        with pytest.raises(PlaceLookupError):
            await provider.searchPlaces("clinic")


class TestReverseGeocode:
    """Test reverseGeocode()"""

    async def testCandidateMapping(self, provider, mockClient):
        mockClient.reverse.return_value = {
            "place_id": 2,
            "name": "Main St Clinic",
            "display_name": "Main St Clinic, 100 Main St, Austin",
            "address": {
                "road": "100 Main St",
                "city": "Austin",
                "state": "TX",
                "country": "USA",
                "postcode": "78701",
            },
        }

        candidates = await provider.reverseGeocode(Coordinate(30.2672, -97.7431))

        assert candidates == [
            ReverseCandidate(
                name="Main St Clinic",
                locality="Austin",
                administrativeArea="TX",
                country="USA",
                thoroughfare="100 Main St",
                postalCode="78701",
            )
        ]
        mockClient.reverse.assert_awaited_once_with(30.2672, -97.7431)

    async def testEmptyFieldsBecomeNone(self, provider, mockClient):
        mockClient.reverse.return_value = {"place_id": 3, "name": "", "address": {"road": ""}}

        candidates = await provider.reverseGeocode(Coordinate(0.0, 0.0))

        assert candidates == [ReverseCandidate()]

    async def testNothingFound(self, provider, mockClient):
        mockClient.reverse.return_value = {"error": "Unable to geocode"}

        assert await provider.reverseGeocode(Coordinate(0.0, 0.0)) == []

    async def testClientFailureRaises(self, provider, mockClient):
        mockClient.reverse.return_value = None

        with pytest.raises(GeocodeError):
            await provider.reverseGeocode(Coordinate(0.0, 0.0))
