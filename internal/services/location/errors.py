"""
Location errors. UI-facing entry points (search, placemark updates, device
location callbacks) catch and log them, dood!
"""


class LocationError(Exception):
    """Base class for location flow errors"""


class PermissionDeniedError(LocationError):
    """Device location access refused"""


class PlaceLookupError(LocationError):
    """Place search provider failed"""


class GeocodeError(LocationError):
    """Reverse geocoding failed"""


class EmptyGeocodeResultError(GeocodeError):
    """Reverse geocoding returned no candidates"""


ResolveError = GeocodeError
