"""Candidate and result models plus the abstract provider interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Any

# Locality fields in order of preference
_LOCALITY_FIELDS = ("city", "town", "village", "hamlet")


@dataclass(frozen=True)
class CandidateComponents:
    """Fixed set of address components the provider reports for a candidate."""

    road: str | None = None
    square: str | None = None
    city: str | None = None
    town: str | None = None
    village: str | None = None
    hamlet: str | None = None
    county: str | None = None
    state: str | None = None
    state_district: str | None = None
    postcode: str | None = None
    country_code: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "CandidateComponents":
        """Build components from the provider's open map, ignoring unknown keys.

        Args:
            data: Raw ``components`` object from the provider response.

        Returns:
            CandidateComponents with every known field copied as a string.
        """
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        values = {key: str(value) for key, value in data.items() if key in known and value not in (None, "")}
        return cls(**values)

    @property
    def has_road_or_square(self) -> bool:
        return bool(self.road or self.square)

    @property
    def locality(self) -> str:
        """First non-empty of city, town, village, hamlet."""
        return next(iter(self.localities), "")

    @property
    def localities(self) -> list[str]:
        return [value for name in _LOCALITY_FIELDS if (value := getattr(self, name))]

    def in_country(self, country_code: str) -> bool:
        """Whether the candidate lies in *country_code*; False when unknown."""
        return (self.country_code or "").lower() == country_code.lower()


@dataclass(frozen=True)
class GeocodeCandidate:
    """One geocoding result returned by the provider for a query."""

    latitude: float
    longitude: float
    confidence: int
    components: CandidateComponents
    formatted: str = ""

    def __post_init__(self) -> None:
        if not (-90 <= self.latitude <= 90):
            msg = f"latitude must be between -90 and 90, got {self.latitude}"
            raise ValueError(msg)
        if not (-180 <= self.longitude <= 180):
            msg = f"longitude must be between -180 and 180, got {self.longitude}"
            raise ValueError(msg)
        if not (0 <= self.confidence <= 10):
            msg = f"confidence must be between 0 and 10, got {self.confidence}"
            raise ValueError(msg)


@dataclass(frozen=True)
class LocationResult:
    """Resolved location handed back to the caller."""

    latitude: float
    longitude: float
    address: str
    confidence: int | None = None
    postcode: str | None = None

    @classmethod
    def from_candidate(cls, candidate: GeocodeCandidate) -> "LocationResult":
        return cls(
            latitude=candidate.latitude,
            longitude=candidate.longitude,
            address=candidate.formatted,
            confidence=candidate.confidence,
            postcode=candidate.components.postcode,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary (useful for JSON serialisation)."""
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "address": self.address,
            "confidence": self.confidence,
            "postcode": self.postcode,
        }


@dataclass(frozen=True)
class QueryOptions:
    """Provider query restrictions chosen by the query policy."""

    limit: int
    country_code: str | None = None
    language: str | None = None


class BaseGeocoder(ABC):
    """Abstract geocoder interface. The provider client implements this."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this geocoder provider."""

    @property
    def requires_api_key(self) -> bool:
        """Whether this provider requires an API key to function."""
        return False

    @property
    def is_configured(self) -> bool:
        """Whether this provider has all required configuration (e.g., API keys)."""
        return True

    @abstractmethod
    async def query(self, text: str, options: QueryOptions) -> list[GeocodeCandidate]:
        """Run a forward geocoding query.

        Args:
            text: Free-text address to look up.
            options: Country, language and result-count restrictions.

        Returns:
            Candidates in provider order; empty when nothing matched.
        """
