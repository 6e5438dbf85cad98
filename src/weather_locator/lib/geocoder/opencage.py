"""OpenCage geocoder provider.

Uses the OpenCage Geocoding API
(https://opencagedata.com/api) for forward geocoding. Requires an API key.
Returns every candidate so that the selector can disambiguate them.
"""

from typing import Any

import httpx
from loguru import logger

from weather_locator.lib.geocoder.base import BaseGeocoder, CandidateComponents, GeocodeCandidate, QueryOptions
from weather_locator.lib.geocoder.errors import GeocodingProviderError

OPENCAGE_API_URL = "https://api.opencagedata.com/geocode/v1/json"
DEFAULT_TIMEOUT = 10.0

_STATUS_MESSAGES: dict[int, str] = {
    402: "Daily API limit reached. Please try again tomorrow.",
    403: "Invalid API key.",
}


class OpenCageGeocoder(BaseGeocoder):
    """OpenCage geocoder provider."""

    def __init__(
        self,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        api_url: str = OPENCAGE_API_URL,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._api_url = api_url

    @property
    def provider_name(self) -> str:
        return "opencage"

    @property
    def requires_api_key(self) -> bool:
        return True

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def _build_params(self, text: str, options: QueryOptions) -> dict[str, str | int]:
        params: dict[str, str | int] = {
            "q": text,
            "key": self._api_key,
            "limit": options.limit,
        }
        if options.country_code:
            params["countrycode"] = options.country_code
        if options.language:
            params["language"] = options.language
        return params

    async def query(self, text: str, options: QueryOptions) -> list[GeocodeCandidate]:
        """Geocode an address using the OpenCage API.

        Args:
            text: Free-text address.
            options: Country, language and result-count restrictions.

        Returns:
            Candidates in provider order, empty when nothing matched.

        Raises:
            GeocodingProviderError: On transport or service errors.
        """
        params = self._build_params(text, options)

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self._api_url, params=params)
                response.raise_for_status()

            data = response.json()
            return self._parse_response(data)

        except httpx.TimeoutException as e:
            logger.warning("OpenCage geocoder timeout for address (redacted)")
            raise GeocodingProviderError("opencage", "Geocoding request timed out.", network=True) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"OpenCage geocoder HTTP error {status}")
            raise GeocodingProviderError("opencage", self._status_message(status), status_code=status) from e
        except httpx.ConnectError as e:
            logger.warning("OpenCage geocoder connection error")
            raise GeocodingProviderError("opencage", "Internet connection not available.", network=True) from e
        except GeocodingProviderError:
            raise
        except Exception as e:
            logger.exception("OpenCage geocoder unexpected error")
            raise GeocodingProviderError("opencage", f"Unexpected error: {e}") from e

    @staticmethod
    def _status_message(status_code: int) -> str:
        """Map an HTTP status code to a user-facing message."""
        if status_code in _STATUS_MESSAGES:
            return _STATUS_MESSAGES[status_code]
        if status_code >= 500:
            return "Service temporarily unavailable. Please try again later."
        return "Error in the geocoding service. Please try again later."

    def _parse_response(self, data: dict[str, Any]) -> list[GeocodeCandidate]:
        """Parse an OpenCage response into candidates.

        Args:
            data: Raw JSON response from OpenCage.

        Returns:
            List of GeocodeCandidate, possibly empty.
        """
        candidates: list[GeocodeCandidate] = []
        for entry in data.get("results") or []:
            try:
                geometry = entry["geometry"]
                candidate = GeocodeCandidate(
                    latitude=float(geometry["lat"]),
                    longitude=float(geometry["lng"]),
                    confidence=int(entry.get("confidence", 0)),
                    components=CandidateComponents.from_dict(entry.get("components")),
                    formatted=entry.get("formatted", ""),
                )
            except (KeyError, ValueError, TypeError) as e:
                logger.warning(f"Failed to parse OpenCage response: {e}")
                raise GeocodingProviderError("opencage", f"Failed to parse response: {e}") from e
            candidates.append(candidate)
        return candidates
