"""
Pytest configuration and common fixtures for Clinic Locator tests.

Provides fake providers, a fresh LocationStore and wired services. All
fixtures follow camelCase naming convention.
"""

import pytest

from internal.services.clinic import ClinicSubmitter
from internal.services.location import LocationResolver, LocationStore, PlacePickerService, PlaceSearch
from tests.fixtures.location_fakes import FakeDeviceLocation, FakeGeocoder, FakePlaceProvider
from tests.utils import TEST_DEBOUNCE_DELAY


# ============================================================================
# Provider Fixtures
# ============================================================================


@pytest.fixture
def placeProvider() -> FakePlaceProvider:
    return FakePlaceProvider()


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest.fixture
def deviceLocation() -> FakeDeviceLocation:
    return FakeDeviceLocation()


@pytest.fixture
def locationStore() -> LocationStore:
    return LocationStore()


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
async def placeSearch(placeProvider, locationStore):
    """
    PlaceSearch over fake provider, closed after test.

    Yields:
        PlaceSearch: Started search with short debounce window
    """
    search = PlaceSearch(placeProvider, locationStore, debounceDelay=TEST_DEBOUNCE_DELAY)
    search.start()
    yield search
    await search.close()


@pytest.fixture
def resolver(geocoder, locationStore, deviceLocation) -> LocationResolver:
    return LocationResolver(geocoder, locationStore, deviceLocation)


@pytest.fixture
async def pickerService(placeProvider, geocoder, deviceLocation, locationStore):
    """
    PlacePickerService wired to fakes, closed after test.

    The submitter is real; tests patch httpx.AsyncClient to intercept POSTs.
    """
    service = PlacePickerService(
        placeProvider,
        geocoder,
        ClinicSubmitter(endpoint="https://clinic.test/api/create"),
        deviceLocation=deviceLocation,
        store=locationStore,
        debounceDelay=TEST_DEBOUNCE_DELAY,
    )
    service.start()
    yield service
    await service.close()
