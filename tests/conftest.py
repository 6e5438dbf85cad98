"""Shared test fixtures for settings and geocoder test doubles."""

import pytest

from weather_locator.core.config import Settings
from weather_locator.lib.geocoder.base import BaseGeocoder, GeocodeCandidate, QueryOptions
from weather_locator.lib.geocoder.errors import GeocodingProviderError


class StubGeocoder(BaseGeocoder):
    """Test geocoder that returns pre-configured candidates and records queries."""

    def __init__(
        self,
        candidates: list[GeocodeCandidate] | None = None,
        error: GeocodingProviderError | None = None,
        configured: bool = True,
    ) -> None:
        self._candidates = candidates or []
        self._error = error
        self._configured = configured
        self.queries: list[tuple[str, QueryOptions]] = []

    @property
    def provider_name(self) -> str:
        return "stub"

    @property
    def is_configured(self) -> bool:
        return self._configured

    async def query(self, text: str, options: QueryOptions) -> list[GeocodeCandidate]:
        self.queries.append((text, options))
        if self._error:
            raise self._error
        return list(self._candidates)


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(_env_file=None, opencage_api_key="test-key")


@pytest.fixture
def stub_geocoder_cls() -> type[StubGeocoder]:
    return StubGeocoder
