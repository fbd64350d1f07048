"""
Location Store

Single source of truth for everything the place-picking UI observes. State is
an immutable snapshot; every update method swaps in a new snapshot and
notifies subscribers. Each slot is overwritten, never merged or queued, dood!
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .models import (
    Address,
    AuthorizationStatus,
    Coordinate,
    PlaceResult,
    ReverseCandidate,
    SubmissionPayload,
)

logger = logging.getLogger(__name__)

PIN_TITLE = "Clinic will be added here"


@dataclass(frozen=True)
class Pin:
    """Draggable map pin marking clinic position"""

    coordinate: Coordinate
    title: str = PIN_TITLE


@dataclass(frozen=True)
class LocationState:
    """Snapshot of location flow state.

    Attributes:
        searchText: Current search field text
        fetchedPlaces: Latest search hits, None for "no results" state
        authorizationStatus: Last known device location authorization
        userLocation: Latest device GPS fix
        pickedLocation: Coordinate chosen by user (search hit, GPS or pin drag)
        pin: Draggable pin on the map
        pickedPlace: Reverse-geocode candidate currently displayed
        address: Address from latest successful resolve
        payload: Submission payload matching ``address``
    """

    searchText: str = ""
    fetchedPlaces: Optional[List[PlaceResult]] = None
    authorizationStatus: AuthorizationStatus = AuthorizationStatus.NOT_DETERMINED
    userLocation: Optional[Coordinate] = None
    pickedLocation: Optional[Coordinate] = None
    pin: Optional[Pin] = None
    pickedPlace: Optional[ReverseCandidate] = None
    address: Optional[Address] = None
    payload: Optional[SubmissionPayload] = None


StateListener = Callable[[LocationState], None]


class LocationStore:
    """Observable holder of LocationState.

    Must be updated from the event loop thread only: there is no locking.

    Example:
        >>> store = LocationStore()
        >>> unsubscribe = store.subscribe(lambda state: print(state.fetchedPlaces))
        >>> store.setFetchedPlaces([])
        >>> unsubscribe()
    """

    def __init__(self, initial: Optional[LocationState] = None):
        self._state = initial if initial is not None else LocationState()
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> LocationState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register listener, returns function removing it"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _update(self, **changes) -> None:
        self._state = dataclasses.replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as e:
                logger.error(f"State listener {listener!r} failed: {e}")
                logger.exception(e)

    def setSearchText(self, text: str) -> None:
        self._update(searchText=text)

    def setFetchedPlaces(self, places: Optional[List[PlaceResult]]) -> None:
        self._update(fetchedPlaces=list(places) if places is not None else None)

    def setAuthorizationStatus(self, status: AuthorizationStatus) -> None:
        self._update(authorizationStatus=status)

    def setUserLocation(self, coordinate: Coordinate) -> None:
        self._update(userLocation=coordinate)

    def setPickedLocation(self, coordinate: Coordinate) -> None:
        self._update(pickedLocation=coordinate)

    def dropPin(self, coordinate: Coordinate) -> None:
        self._update(pin=Pin(coordinate))

    def setResolved(self, candidate: ReverseCandidate, address: Address) -> None:
        """Replace displayed place, address and payload in one step"""
        self._update(pickedPlace=candidate, address=address, payload=address.toPayload())

    def clearTransient(self) -> None:
        """Forget map/pin state and displayed place, used on teardown.

        Address and payload are kept: they stay submittable.
        """
        self._update(pin=None, pickedLocation=None, pickedPlace=None)
