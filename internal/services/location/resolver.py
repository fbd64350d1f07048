"""
Location Resolver

Reverse-geocodes a picked coordinate into the clinic Address and keeps the
single address/payload slot of LocationStore up to date. Also handles device
location and map pin callbacks (LocationEventsHandler), dood!
"""

import asyncio
import logging
from collections.abc import MutableSet
from typing import Optional, Sequence

from .errors import EmptyGeocodeResultError, GeocodeError, PermissionDeniedError, ResolveError
from .models import Address, AuthorizationStatus, Coordinate
from .providers import DeviceLocationProvider, ReverseGeocodeProvider
from .store import LocationStore

logger = logging.getLogger(__name__)


class LocationResolver:
    """Coordinate -> Address resolver and location events handler, dood!

    Concurrent resolves are not serialized: whichever completes last sets the
    stored address, regardless of the order they were issued in.

    Example:
        >>> resolver = LocationResolver(provider, store, deviceLocation)
        >>> address = await resolver.resolve(Coordinate(30.2672, -97.7431))
        >>> resolver.onAnnotationDragged(Coordinate(30.2680, -97.7440))  # fire-and-forget
    """

    def __init__(
        self,
        geocoder: ReverseGeocodeProvider,
        store: LocationStore,
        deviceLocation: Optional[DeviceLocationProvider] = None,
    ):
        self.geocoder = geocoder
        self.store = store
        self.deviceLocation = deviceLocation
        self.backgroundTasks: MutableSet[asyncio.Task] = set[asyncio.Task]()
        self._closed = False

    async def resolve(self, coordinate: Coordinate) -> Address:
        """Reverse-geocode coordinate and store resulting address.

        Only first candidate is used. On success displayed place, address and
        payload are replaced together. On any failure state is left untouched:
        with zero candidates the previously displayed place stays as it was.

        Args:
            coordinate: Coordinate to resolve

        Returns:
            Address built from first candidate

        Raises:
            ResolveError: If provider failed (GeocodeError) or returned
                nothing (EmptyGeocodeResultError)
        """
        try:
            candidates = await self.geocoder.reverseGeocode(coordinate)
        except GeocodeError:
            raise
        except Exception as e:
            raise GeocodeError(f"Reverse geocoding of {coordinate} failed: {e}") from e

        if not candidates:
            raise EmptyGeocodeResultError(f"No address found at {coordinate}")

        candidate = candidates[0]
        address = Address.fromCandidate(candidate)
        if self._closed:
            logger.debug(f"Resolver closed, not storing address for {coordinate}")
        else:
            self.store.setResolved(candidate, address)
            logger.debug(f"Resolved {coordinate} to {address}")
        return address

    def updatePlacemark(self, coordinate: Coordinate) -> asyncio.Task:
        """Resolve coordinate in background, failures are only logged"""
        task = asyncio.create_task(self._updatePlacemark(coordinate), name=f"placemark:{coordinate}")
        self.backgroundTasks.add(task)
        task.add_done_callback(self.backgroundTasks.discard)
        return task

    async def _updatePlacemark(self, coordinate: Coordinate) -> Optional[Address]:
        try:
            return await self.resolve(coordinate)
        except ResolveError as e:
            logger.warning(f"Failed to resolve {coordinate}: {e}")
            return None

    async def waitIdle(self) -> None:
        """Wait for all running placemark updates"""
        while self.backgroundTasks:
            await asyncio.wait(set(self.backgroundTasks))

    def close(self) -> None:
        """Stop storing results. Running geocodes are left to finish."""
        self._closed = True

    ###
    # LocationEventsHandler
    ###

    def onAuthorizationChanged(self, status: AuthorizationStatus) -> None:
        if self._closed:
            return
        self.store.setAuthorizationStatus(status)

        match status:
            case AuthorizationStatus.AUTHORIZED_ALWAYS | AuthorizationStatus.AUTHORIZED_WHEN_IN_USE:
                if self.deviceLocation is not None:
                    self.deviceLocation.requestLocation()
            case AuthorizationStatus.DENIED:
                self.handleLocationError(PermissionDeniedError("Location access denied"))
            case AuthorizationStatus.NOT_DETERMINED:
                if self.deviceLocation is not None:
                    self.deviceLocation.requestWhenInUseAuthorization()
            case _:
                logger.debug(f"Nothing to do for authorization status {status}")

    def onLocationUpdated(self, locations: Sequence[Coordinate]) -> None:
        if self._closed or not locations:
            return
        self.store.setUserLocation(locations[-1])

    def onLocationFailed(self, error: Exception) -> None:
        self.handleLocationError(error)

    def onAnnotationDragged(self, coordinate: Coordinate) -> None:
        if self._closed:
            return
        self.store.setPickedLocation(coordinate)
        self.store.dropPin(coordinate)
        self.updatePlacemark(coordinate)

    def handleLocationError(self, error: Exception) -> None:
        logger.warning(f"Device location error: {error}")
