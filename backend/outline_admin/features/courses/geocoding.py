"""
Reverse geocoding.

Turns a coordinate into a PlaceRecord using a Google-style geocoding
endpoint:

    GET {url}?latlng={lat},{lng}&key={key}
    -> {"results": [{"formatted_address": ..., "address_components": [
           {"types": [...], "long_name": ..., "short_name": ...}]}]}

Geocoding is best-effort enrichment. Any failure (network, non-2xx,
malformed body, no results) is logged and resolves to None.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from outline_admin.config import settings
from outline_admin.shared.errors import ResolutionUnavailable

from .schemas import Coordinate, PlaceRecord

logger = logging.getLogger(__name__)


# PlaceRecord attribute -> (address component type, name key)
COMPONENT_FIELDS: dict[str, tuple[str, str]] = {
    "iso_country_code": ("country", "short_name"),
    "administrative_area": ("administrative_area_level_1", "long_name"),
    "sub_administrative_area": ("administrative_area_level_2", "long_name"),
    "locality": ("locality", "long_name"),
    "sub_locality": ("sublocality", "long_name"),
    "throughfare": ("route", "long_name"),
    "sub_throughfare": ("street_number", "long_name"),
}


def _component_name(components: list[dict[str, Any]], type_tag: str, name_key: str) -> str:
    for component in components:
        if type_tag in (component.get("types") or []):
            return component.get(name_key) or ""
    return ""


def place_from_result(result: dict[str, Any]) -> PlaceRecord:
    """
    Normalize one geocoding result into a PlaceRecord.

    Raises:
        ResolutionUnavailable: If the result is not shaped like a geocoding result
    """
    components = result.get("address_components") or []
    if not isinstance(components, list) or not all(isinstance(c, dict) for c in components):
        raise ResolutionUnavailable("malformed address_components")

    try:
        values = {
            attr: _component_name(components, type_tag, name_key)
            for attr, (type_tag, name_key) in COMPONENT_FIELDS.items()
        }
        return PlaceRecord(name=result.get("formatted_address") or "", **values)
    except (TypeError, ValidationError) as e:
        raise ResolutionUnavailable(f"malformed result: {e}") from e


class PlaceResolver:
    """
    Reverse geocoder.

    Without an API key the resolver is disabled and never makes a request.
    An httpx.AsyncClient can be injected; otherwise one is created per call.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        language: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.geocoding_api_key
        self.api_url = api_url or settings.geocoding_api_url
        self.language = language if language is not None else settings.geocoding_language
        self.timeout = timeout or settings.geocoding_timeout
        self._client = client

        if not self.enabled:
            logger.info("PlaceResolver disabled: GEOCODING_API_KEY not set")

    @property
    def enabled(self) -> bool:
        """Check if resolver is configured."""
        return bool(self.api_key)

    async def resolve(self, coordinate: Coordinate) -> Optional[PlaceRecord]:
        """
        Resolve a coordinate to a place.

        Args:
            coordinate: Point to look up

        Returns:
            PlaceRecord for the first result, None if unresolved
        """
        if not self.enabled:
            return None
        try:
            results = await self._fetch_results(coordinate)
            return place_from_result(results[0])
        except ResolutionUnavailable as e:
            logger.warning(f"Reverse geocoding failed for {coordinate.latitude},{coordinate.longitude}: {e}")
            return None

    async def _fetch_results(self, coordinate: Coordinate) -> list[dict[str, Any]]:
        params = {
            "latlng": f"{coordinate.latitude},{coordinate.longitude}",
            "key": self.api_key,
        }
        if self.language:
            params["language"] = self.language

        try:
            if self._client is not None:
                response = await self._client.get(self.api_url, params=params)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.api_url, params=params)
        except httpx.TimeoutException as e:
            raise ResolutionUnavailable("timeout") from e
        except httpx.HTTPError as e:
            raise ResolutionUnavailable(f"request error: {e}") from e

        if not response.is_success:
            raise ResolutionUnavailable(f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise ResolutionUnavailable("malformed response body") from e

        results = data.get("results") if isinstance(data, dict) else None
        if not results:
            status = data.get("status") if isinstance(data, dict) else None
            raise ResolutionUnavailable(f"no results (status={status})")
        if not isinstance(results, list) or not isinstance(results[0], dict):
            raise ResolutionUnavailable("malformed results")
        return results
