"""
Geocode Maps API Async Client

This module provides the GeocodeMapsClient class used for place lookup
(forward geocoding) and reverse geocoding against geocode.maps.co.
"""

import logging
from typing import Any, Dict, Optional, cast

import httpx

from .models import ReverseResponse, SearchResponse

logger = logging.getLogger(__name__)


class GeocodeMapsClient:
    """Async client for Geocode Maps API, dood!

    Creates new HTTP session for each request to support proper concurrent
    operations: a superseded search may still be running while the next one
    starts. Any error is logged and reported as ``None``.

    Example:
        >>> from lib.geocode_maps import GeocodeMapsClient
        >>>
        >>> client = GeocodeMapsClient(apiKey="your_api_key", acceptLanguage="en")
        >>>
        >>> # Place lookup
        >>> results = await client.search("austin clinic")
        >>>
        >>> # Reverse geocoding
        >>> location = await client.reverse(30.2672, -97.7431)
    """

    API_BASE_URL = "https://geocode.maps.co"

    def __init__(
        self,
        apiKey: str,
        requestTimeout: float = 10,
        acceptLanguage: Optional[str] = None,
        apiBaseUrl: Optional[str] = None,
    ):
        """Initialize Geocode Maps client, dood!

        Args:
            apiKey: Geocode Maps API key (required)
            requestTimeout: HTTP request timeout in seconds (default: 10)
            acceptLanguage: Optional language for results (e.g., "en", "fr") (default: None)
            apiBaseUrl: Override for API base URL, for self-hosted Nominatim (default: geocode.maps.co)
        """
        self.apiKey = apiKey
        self.requestTimeout = requestTimeout
        self.acceptLanguage = acceptLanguage
        self.apiBaseUrl = (apiBaseUrl or self.API_BASE_URL).rstrip("/")

    def _detailParams(self, addressdetails: bool, acceptLanguage: Optional[str]) -> Dict[str, Any]:
        params: Dict[str, Any] = {"addressdetails": int(addressdetails)}
        if acceptLanguage:
            params["accept-language"] = acceptLanguage
        return params

    async def search(
        self,
        query: str,
        *,
        limit: int = 10,
        countrycodes: Optional[str] = None,
        addressdetails: bool = True,
        acceptLanguage: Optional[str] = None,
    ) -> Optional[SearchResponse]:
        """Forward geocoding: free-text place lookup, dood!

        Args:
            query: Free-form search query (e.g., "main st clinic austin")
            limit: Maximum number of results (default: 10)
            countrycodes: Comma-separated country codes to restrict search (e.g., "us,ca")
            addressdetails: Include structured address (default: True)
            acceptLanguage: Language for results, overrides client default

        Returns:
            List of search results in provider order, or None if error occurs
        """
        params = self._detailParams(addressdetails, acceptLanguage)
        params.update(q=query.strip(), limit=limit)
        if countrycodes:
            params["countrycodes"] = countrycodes

        data = await self._makeRequest("search", params)
        if data is None or isinstance(data, list):
            return cast(Optional[SearchResponse], data)

        logger.error(f"Geocode Maps search: expected list, got {type(data).__name__}")
        return None

    async def reverse(
        self,
        lat: float,
        lon: float,
        *,
        zoom: Optional[int] = None,
        addressdetails: bool = True,
        acceptLanguage: Optional[str] = None,
    ) -> Optional[ReverseResponse]:
        """Reverse geocoding: nearest address to coordinates, dood!

        Args:
            lat: Latitude (-90 to 90)
            lon: Longitude (-180 to 180)
            zoom: Detail level (3-18, higher = more detailed)
            addressdetails: Include structured address (default: True)
            acceptLanguage: Language for results, overrides client default

        Returns:
            Reverse geocoding result, ``{"error": ...}`` body if nothing is
            there, or None if error occurs
        """
        params = self._detailParams(addressdetails, acceptLanguage)
        params.update(lat=lat, lon=lon)
        if zoom is not None:
            params["zoom"] = zoom

        data = await self._makeRequest("reverse", params)
        if data is None or isinstance(data, dict):
            return cast(Optional[ReverseResponse], data)

        logger.error(f"Geocode Maps reverse: expected object, got {type(data).__name__}")
        return None

    async def _makeRequest(self, endpoint: str, params: Dict[str, Any]) -> Optional[Any]:
        """GET ``{apiBaseUrl}/{endpoint}`` and decode JSON body, dood!

        Adds api_key, format and client default accept-language to params.
        Every failure (non-200 status, timeout, network error, malformed JSON)
        is logged and reported as None.
        """
        url = f"{self.apiBaseUrl}/{endpoint}"
        logger.debug(f"GET {url} {params}")

        query = dict(params, api_key=self.apiKey, format="jsonv2")
        if self.acceptLanguage:
            query.setdefault("accept-language", self.acceptLanguage)

        try:
            async with httpx.AsyncClient(timeout=self.requestTimeout) as session:
                response = await session.get(url, params=query)
                if response.status_code != 200:
                    self._logFailedResponse(endpoint, response)
                    return None
                return response.json()
        except httpx.TimeoutException:
            logger.error(f"Geocode Maps {endpoint}: no response in {self.requestTimeout}s")
        except httpx.RequestError as e:
            logger.error(f"Geocode Maps {endpoint}: network error: {e}")
        except ValueError as e:
            # json.JSONDecodeError included
            logger.error(f"Geocode Maps {endpoint}: malformed JSON: {e}")
        except Exception as e:
            logger.error(f"Geocode Maps {endpoint}: unexpected error: {e}")
            logger.exception(e)
        return None

    def _logFailedResponse(self, endpoint: str, response: httpx.Response) -> None:
        status = response.status_code
        match status:
            case 401 | 403:
                logger.error(f"Geocode Maps {endpoint}: API key rejected ({status})")
            case 404:
                logger.warning(f"Geocode Maps {endpoint}: not found")
            case 429:
                logger.error(f"Geocode Maps {endpoint}: rate limit exceeded")
            case _ if status >= 500:
                logger.error(f"Geocode Maps {endpoint}: server error {status}")
            case _:
                logger.error(f"Geocode Maps {endpoint}: HTTP {status}: {response.text}")
