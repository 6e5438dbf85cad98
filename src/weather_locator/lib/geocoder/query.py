"""Query construction policy for the geocoding provider."""

from weather_locator.lib.geocoder.address import dedupe_query_text
from weather_locator.lib.geocoder.base import QueryOptions
from weather_locator.lib.geocoder.rules import ITALIAN_RULES, LocaleRules

DEFAULT_LIMIT = 15
LOCALE_LIMIT = 5


def is_likely_italian_address(address: str, rules: LocaleRules = ITALIAN_RULES) -> bool:
    """Keyword heuristic: does the address mention a major Italian city or "italia"?"""
    return rules.mentions_locale(address)


def build_query_options(
    address: str,
    country_code: str | None = None,
    rules: LocaleRules = ITALIAN_RULES,
    default_limit: int = DEFAULT_LIMIT,
    locale_limit: int = LOCALE_LIMIT,
) -> QueryOptions:
    """Choose provider restrictions for an address.

    - a caller-supplied country code restricts the query to that country;
    - otherwise an address that looks local is biased to the locale's country
      and language with a short result list;
    - anything else is an unrestricted query.

    Args:
        address: Address text that will be sent to the provider.
        country_code: Country the caller already knows the address is in.
        rules: Locale whose keywords and country code drive the bias.
        default_limit: Result count for restricted and unrestricted queries.
        locale_limit: Result count for locale-biased queries.

    Returns:
        QueryOptions for the provider.
    """
    if country_code:
        return QueryOptions(limit=default_limit, country_code=country_code.lower())
    if rules.mentions_locale(address):
        return QueryOptions(limit=locale_limit, country_code=rules.country_code, language=rules.country_code)
    return QueryOptions(limit=default_limit)


def build_query_text(address: str, rules: LocaleRules = ITALIAN_RULES) -> str:
    """Address text sent to the provider, with a doubled road type removed."""
    return dedupe_query_text(address.strip(), rules)
