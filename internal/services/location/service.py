"""
Place Picker Service

Facade over search, resolver and submitter for the clinic place-picking flow:
search -> pick a place (or use current location) -> drag pin -> submit.
UI layers drive it and observe ``store``, dood!
"""

import asyncio
import logging
from typing import Optional

from internal.services.clinic import ClinicSubmitter

from .models import Coordinate, PlaceResult
from .providers import DeviceLocationProvider, PlaceLookupProvider, ReverseGeocodeProvider
from .resolver import LocationResolver
from .search import DEFAULT_DEBOUNCE_DELAY, PlaceSearch
from .store import LocationStore

logger = logging.getLogger(__name__)


class PlacePickerService:
    """Clinic place-picking flow, dood!

    Example:
        >>> service = PlacePickerService(provider, provider, ClinicSubmitter())
        >>> service.start()
        >>> service.setSearchText("Main St Clinic")
        >>> await service.waitIdle()
        >>> service.pickPlace(service.store.state.fetchedPlaces[0])
        >>> await service.waitIdle()
        >>> service.submitClinic()
        >>> await service.close()
    """

    def __init__(
        self,
        lookupProvider: PlaceLookupProvider,
        geocoder: ReverseGeocodeProvider,
        submitter: ClinicSubmitter,
        deviceLocation: Optional[DeviceLocationProvider] = None,
        store: Optional[LocationStore] = None,
        debounceDelay: float = DEFAULT_DEBOUNCE_DELAY,
    ):
        self.store = store if store is not None else LocationStore()
        self.submitter = submitter
        self.deviceLocation = deviceLocation
        self.search = PlaceSearch(lookupProvider, self.store, debounceDelay=debounceDelay)
        self.resolver = LocationResolver(geocoder, self.store, deviceLocation)

    def start(self) -> None:
        """Start watching search text and ask for location permission"""
        self.search.start()
        if self.deviceLocation is not None:
            self.store.setAuthorizationStatus(self.deviceLocation.authorizationStatus)
            self.deviceLocation.requestWhenInUseAuthorization()

    def setSearchText(self, text: str) -> None:
        self.search.setSearchText(text)

    def pickPlace(self, place: PlaceResult) -> asyncio.Task:
        """Put pin on chosen search hit and resolve its address"""
        self.store.setPickedLocation(place.coordinate)
        return self._placePin(place.coordinate)

    def useCurrentLocation(self) -> Optional[asyncio.Task]:
        """Put pin on device location if it is known"""
        userLocation = self.store.state.userLocation
        if userLocation is None:
            logger.debug("Current location is unknown yet")
            return None
        return self._placePin(userLocation)

    def _placePin(self, coordinate: Coordinate) -> asyncio.Task:
        self.store.dropPin(coordinate)
        return self.resolver.updatePlacemark(coordinate)

    def submitClinic(self) -> asyncio.Task:
        """Submit latest resolved address in background"""
        return self.submitter.fireAndForget(self.store.state.payload)

    async def waitIdle(self) -> None:
        """Wait for pending search and placemark updates"""
        await self.search.waitIdle()
        await self.resolver.waitIdle()

    async def close(self) -> None:
        """Tear down: stop search, ignore late geocodes, clear pin state"""
        await self.search.close()
        self.resolver.close()
        self.store.clearTransient()
        logger.debug("Place picker closed")
