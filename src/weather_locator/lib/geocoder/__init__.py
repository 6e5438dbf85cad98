"""Geocoder library — address parsing and geocoding candidate disambiguation.

Public API:
    - parse_address: Split a free-text address into ParsedAddress fields
    - strip_road_type: Remove a leading road type ("via", "piazza", ...)
    - fuzzy_match / levenshtein_distance: Approximate name comparison
    - LocaleRules / ITALIAN_RULES: Road-type and mismatch heuristic tables
    - CandidateSelector / ResultRanker: Pick the best candidate for an address
    - build_query_options / build_query_text: Provider query policy
    - OpenCageGeocoder: OpenCage provider
    - GeocodeCandidate / CandidateComponents / LocationResult: Data models
    - GeocodeError and subclasses: Classified failures
    - Ok / Err: Tagged resolution result
"""

from weather_locator.lib.geocoder.address import ParsedAddress, parse_address, strip_road_type
from weather_locator.lib.geocoder.base import (
    BaseGeocoder,
    CandidateComponents,
    GeocodeCandidate,
    LocationResult,
    QueryOptions,
)
from weather_locator.lib.geocoder.errors import (
    AddressValidationError,
    GeocodeError,
    GeocodingProviderError,
    NoResultsError,
)
from weather_locator.lib.geocoder.fuzzy import fuzzy_match, levenshtein_distance, strict_city_match
from weather_locator.lib.geocoder.opencage import OpenCageGeocoder
from weather_locator.lib.geocoder.query import build_query_options, build_query_text, is_likely_italian_address
from weather_locator.lib.geocoder.result import Err, Ok
from weather_locator.lib.geocoder.rules import ITALIAN_ROAD_TYPES, ITALIAN_RULES, LocaleRules
from weather_locator.lib.geocoder.selector import (
    FALLBACK_CONFIDENCE_THRESHOLD,
    PRIMARY_CONFIDENCE_THRESHOLD,
    CandidateSelector,
    ResultRanker,
)

__all__ = [
    "AddressValidationError",
    "BaseGeocoder",
    "CandidateComponents",
    "CandidateSelector",
    "Err",
    "FALLBACK_CONFIDENCE_THRESHOLD",
    "GeocodeCandidate",
    "GeocodeError",
    "GeocodingProviderError",
    "ITALIAN_ROAD_TYPES",
    "ITALIAN_RULES",
    "LocaleRules",
    "LocationResult",
    "NoResultsError",
    "Ok",
    "OpenCageGeocoder",
    "PRIMARY_CONFIDENCE_THRESHOLD",
    "ParsedAddress",
    "QueryOptions",
    "ResultRanker",
    "build_query_options",
    "build_query_text",
    "fuzzy_match",
    "is_likely_italian_address",
    "levenshtein_distance",
    "parse_address",
    "strict_city_match",
    "strip_road_type",
]
