"""
Location services for clinic place picking: debounced place search, reverse
geocoding of the picked coordinate and the state store the UI observes, dood!

Example:
    >>> from internal.services.location import GeocodeMapsPlaceProvider, PlacePickerService
    >>> from internal.services.clinic import ClinicSubmitter
    >>>
    >>> provider = GeocodeMapsPlaceProvider(GeocodeMapsClient(apiKey="..."))
    >>> service = PlacePickerService(provider, provider, ClinicSubmitter())
    >>> service.start()
    >>> service.setSearchText("Main St Clinic")
"""

from .errors import (
    EmptyGeocodeResultError,
    GeocodeError,
    LocationError,
    PermissionDeniedError,
    PlaceLookupError,
    ResolveError,
)
from .geocode_maps_provider import GeocodeMapsPlaceProvider
from .models import (
    Address,
    AuthorizationStatus,
    Coordinate,
    PlaceResult,
    ReverseCandidate,
    SubmissionPayload,
)
from .providers import (
    DeviceLocationProvider,
    LocationEventsHandler,
    PlaceLookupProvider,
    ReverseGeocodeProvider,
)
from .resolver import LocationResolver
from .search import PlaceSearch
from .service import PlacePickerService
from .store import LocationState, LocationStore, Pin

__all__ = [
    # Errors
    "LocationError",
    "PermissionDeniedError",
    "PlaceLookupError",
    "GeocodeError",
    "EmptyGeocodeResultError",
    "ResolveError",
    # Models
    "Address",
    "AuthorizationStatus",
    "Coordinate",
    "PlaceResult",
    "ReverseCandidate",
    "SubmissionPayload",
    # Providers
    "DeviceLocationProvider",
    "LocationEventsHandler",
    "PlaceLookupProvider",
    "ReverseGeocodeProvider",
    "GeocodeMapsPlaceProvider",
    # Services
    "LocationResolver",
    "PlaceSearch",
    "PlacePickerService",
    "LocationState",
    "LocationStore",
    "Pin",
]
