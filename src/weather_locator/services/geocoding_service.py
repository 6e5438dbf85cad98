"""Geocoding service — resolves a user-typed address to a single location.

Applies the query policy, calls the provider once, and lets the candidate
selector disambiguate the returned candidates. Every failure comes back as
an ``Err`` carrying a classified error; nothing is raised to the caller.
"""

from loguru import logger

from weather_locator.core.config import Settings, get_settings
from weather_locator.lib.geocoder import (
    BaseGeocoder,
    CandidateSelector,
    Err,
    GeocodingProviderError,
    LocationResult,
    NoResultsError,
    Ok,
    OpenCageGeocoder,
    build_query_options,
    build_query_text,
)


def create_geocoder(settings: Settings) -> OpenCageGeocoder:
    """Build the OpenCage provider from application settings."""
    return OpenCageGeocoder(
        api_key=settings.opencage_api_key,
        timeout=settings.opencage_timeout,
        api_url=settings.opencage_api_url,
    )


async def geocode_address(
    address: str,
    country_code: str | None = None,
    *,
    geocoder: BaseGeocoder | None = None,
    selector: CandidateSelector | None = None,
    settings: Settings | None = None,
) -> Ok[LocationResult] | Err:
    """Resolve a free-text address to coordinates.

    Args:
        address: Address exactly as typed by the user.
        country_code: ISO country code when the caller already knows it.
        geocoder: Provider to query; built from settings when omitted.
        selector: Candidate selector; Italian rules when omitted.
        settings: Application settings; loaded from the environment when omitted.

    Returns:
        ``Ok(LocationResult)`` on success, otherwise ``Err`` holding an
        ``AddressValidationError``, ``NoResultsError`` or ``GeocodingProviderError``.
    """
    if not address or not address.strip():
        return Err(NoResultsError())

    settings = settings or get_settings()
    geocoder = geocoder or create_geocoder(settings)
    selector = selector or CandidateSelector()

    if not geocoder.is_configured:
        logger.warning(f"Geocoder {geocoder.provider_name} is not configured")
        return Err(GeocodingProviderError(geocoder.provider_name, "Geocoding API key is not configured."))

    query_text = build_query_text(address, selector.rules)
    options = build_query_options(
        query_text,
        country_code,
        selector.rules,
        default_limit=settings.geocoder_default_limit,
        locale_limit=settings.geocoder_italian_limit,
    )

    try:
        candidates = await geocoder.query(query_text, options)
    except GeocodingProviderError as e:
        return Err(e)

    if not candidates:
        logger.info(f"Geocoder {geocoder.provider_name} returned no candidates")
        return Err(NoResultsError())

    outcome = selector.select(candidates, address)
    if isinstance(outcome, Err):
        logger.info(f"Address rejected: {outcome.code}")
        return outcome

    logger.debug(f"Selected candidate with confidence {outcome.value.confidence} out of {len(candidates)}")
    return Ok(LocationResult.from_candidate(outcome.value))
