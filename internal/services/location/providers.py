"""
Provider protocols: narrow capability interfaces between the location flow
and platform services (search, geocoding, device location), dood!
"""

from typing import List, Protocol, Sequence

from .models import AuthorizationStatus, Coordinate, PlaceResult, ReverseCandidate


class PlaceLookupProvider(Protocol):
    """Free-text place search"""

    async def searchPlaces(self, query: str) -> List[PlaceResult]:
        """Return hits in provider order.

        Raises:
            PlaceLookupError: If provider failed
        """
        ...


class ReverseGeocodeProvider(Protocol):
    """Coordinate to address candidates"""

    async def reverseGeocode(self, coordinate: Coordinate) -> List[ReverseCandidate]:
        """Return zero or more candidates, best first.

        Raises:
            GeocodeError: If provider failed
        """
        ...


class DeviceLocationProvider(Protocol):
    """Device GPS. Results come back through LocationEventsHandler."""

    @property
    def authorizationStatus(self) -> AuthorizationStatus: ...

    def requestWhenInUseAuthorization(self) -> None: ...

    def requestLocation(self) -> None: ...


class LocationEventsHandler(Protocol):
    """Callbacks from device location provider and map pin"""

    def onAuthorizationChanged(self, status: AuthorizationStatus) -> None: ...

    def onLocationUpdated(self, locations: Sequence[Coordinate]) -> None: ...

    def onLocationFailed(self, error: Exception) -> None: ...

    def onAnnotationDragged(self, coordinate: Coordinate) -> None: ...
