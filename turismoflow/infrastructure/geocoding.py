"""
Address autocomplete via Nominatim (OpenStreetMap search API).

Best-effort enrichment: callers store the chosen coordinates on the passenger or the
company profile. No match is an empty list; a failed call raises GeocodingError.
"""

import logging
from typing import List, Optional, Protocol

import httpx

from turismoflow.domain.errors import GeocodingError
from turismoflow.domain.models import Coordinates, GeocodeCandidate

_logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3


class Geocoder(Protocol):
    def search(self, query: str) -> List[GeocodeCandidate]:
        ...


def short_label(display_name: str) -> str:
    """First three comma-separated parts of a display name."""
    return ",".join(display_name.split(",")[:3])


class NominatimGeocoder:
    def __init__(
        self,
        api_url: str = "https://nominatim.openstreetmap.org/search",
        country_codes: Optional[str] = "br",
        limit: int = 5,
        user_agent: str = "turismoflow/1.0",
        timeout: float = 20.0,
        client: Optional[httpx.Client] = None,
    ):
        self.api_url = api_url
        self.country_codes = country_codes
        self.limit = limit
        self.user_agent = user_agent
        self._client = client or httpx.Client(timeout=timeout)

    def search(self, query: str) -> List[GeocodeCandidate]:
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []

        params = {
            "format": "json",
            "q": query,
            "addressdetails": "1",
            "limit": str(self.limit),
        }
        if self.country_codes:
            params["countrycodes"] = self.country_codes

        try:
            response = self._client.get(
                self.api_url, params=params, headers={"User-Agent": self.user_agent}
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            _logger.error("Geocoding error: status=%d query=%r", e.response.status_code, query)
            raise GeocodingError(f"Geocoding failed (HTTP {e.response.status_code})") from e
        except (httpx.RequestError, ValueError) as e:
            _logger.error("Geocoding request failed: query=%r: %s", query, e)
            raise GeocodingError(f"Geocoding failed: {e}") from e

        candidates: List[GeocodeCandidate] = []
        for item in data if isinstance(data, list) else []:
            try:
                coords = Coordinates(lat=float(item["lat"]), lng=float(item["lon"]))
            except (KeyError, TypeError, ValueError):
                continue
            label = str(item.get("display_name") or "")
            candidates.append(
                GeocodeCandidate(label=label, short_label=short_label(label), coordinates=coords)
            )
        _logger.info("Geocoding query=%r -> %d candidates", query, len(candidates))
        return candidates
