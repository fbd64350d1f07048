"""
Test fixtures package for Clinic Locator tests.

- location_fakes: Fake place search, reverse geocoding and device location
  providers plus sample coordinates and candidates

All fixtures are also available through the main conftest.py file.
"""

from tests.fixtures.location_fakes import (
    AUSTIN,
    AUSTIN_CANDIDATE,
    DALLAS,
    DALLAS_CANDIDATE,
    FakeDeviceLocation,
    FakeGeocoder,
    FakePlaceProvider,
    makePlace,
)

__all__ = [
    "AUSTIN",
    "AUSTIN_CANDIDATE",
    "DALLAS",
    "DALLAS_CANDIDATE",
    "FakeDeviceLocation",
    "FakeGeocoder",
    "FakePlaceProvider",
    "makePlace",
]
