"""Candidate selection — pick the single best geocoding result for an address.

The provider returns several approximate, sometimes contradictory candidates.
``CandidateSelector`` narrows them down with a layered policy:

1. candidates without a road or square are never returned;
2. a parsed postcode must be matched exactly (preferring a matching road);
3. without a postcode, the road must match, and the city too when given;
4. with neither, the first usable candidate wins;
5. when no candidate has a road or square, ``ResultRanker`` scores every raw
   candidate to produce the most useful diagnostic.
"""

from collections.abc import Sequence

from loguru import logger

from weather_locator.lib.geocoder.address import ParsedAddress, parse_address, strip_road_type
from weather_locator.lib.geocoder.base import CandidateComponents, GeocodeCandidate
from weather_locator.lib.geocoder.errors import AddressValidationError, GeocodeError, NoResultsError
from weather_locator.lib.geocoder.fuzzy import fuzzy_match, strict_city_match
from weather_locator.lib.geocoder.result import Err, Ok
from weather_locator.lib.geocoder.rules import ITALIAN_RULES, LocaleRules

# Candidates below this confidence are rejected by the scoring fallback
PRIMARY_CONFIDENCE_THRESHOLD = 9

# Last resort when scoring leaves nothing and produced no diagnostic
FALLBACK_CONFIDENCE_THRESHOLD = 8

_VERIFY = "Please verify the entered address."


def _first_locality(components: CandidateComponents) -> str:
    """City, town or village (hamlets are not used for scoring)."""
    return components.city or components.town or components.village or ""


class ResultRanker:
    """Score candidates against a parsed address and keep the best one."""

    def __init__(self, rules: LocaleRules = ITALIAN_RULES) -> None:
        self._rules = rules

    def rank(self, candidates: Sequence[GeocodeCandidate], parsed: ParsedAddress) -> GeocodeCandidate | None:
        """Return the highest-scoring acceptable candidate.

        Score is the candidate confidence plus one point per matching city,
        province/county and postcode. Ties keep provider order.

        Args:
            candidates: All candidates returned by the provider.
            parsed: Parsed user address.

        Returns:
            Best candidate, the first one with fallback confidence when no
            candidate survived without a diagnostic, or None.

        Raises:
            AddressValidationError: No candidate survived and at least one was
                rejected with a diagnostic (the first one is reported).
        """
        diagnostics: list[str] = []
        scored: list[tuple[int, GeocodeCandidate]] = []

        for candidate in candidates:
            if candidate.confidence < PRIMARY_CONFIDENCE_THRESHOLD:
                diagnostics.append(f"Low confidence ({candidate.confidence}/10)")
                continue

            components = candidate.components
            if components.country_code and not components.in_country(self._rules.country_code):
                bonus = self._score_foreign(components, parsed, diagnostics)
            else:
                bonus = self._score_domestic(components, parsed, diagnostics)

            if bonus is not None:
                scored.append((bonus + candidate.confidence, candidate))

        if scored:
            score, best = max(scored, key=lambda item: item[0])
            logger.debug(f"Ranked {len(scored)} candidate(s), best score {score}")
            return best

        if diagnostics:
            raise AddressValidationError(f"{diagnostics[0]}. {_VERIFY}")

        return next((c for c in candidates if c.confidence >= FALLBACK_CONFIDENCE_THRESHOLD), None)

    @staticmethod
    def _score_foreign(
        components: CandidateComponents, parsed: ParsedAddress, diagnostics: list[str]
    ) -> int | None:
        """Score a candidate outside the locale; fields are checked only when present on both sides."""
        bonus = 0

        geocoded_city = _first_locality(components)
        if geocoded_city and parsed.city:
            if not fuzzy_match(geocoded_city, parsed.city):
                diagnostics.append(f'City mismatch: found "{geocoded_city}" instead of "{parsed.city}"')
                return None
            bonus += 1

        if parsed.postcode and components.postcode:
            if components.postcode.lower() != parsed.postcode.lower():
                diagnostics.append(
                    f'Postcode mismatch: found "{components.postcode}" instead of "{parsed.postcode}"'
                )
                return None
            bonus += 1

        if parsed.county and components.county:
            if not fuzzy_match(components.county, parsed.county):
                diagnostics.append(f'County mismatch: found "{components.county}" instead of "{parsed.county}"')
                return None
            bonus += 1

        return bonus

    def _score_domestic(
        self, components: CandidateComponents, parsed: ParsedAddress, diagnostics: list[str]
    ) -> int | None:
        """Score a candidate inside the locale; the city is mandatory."""
        geocoded_city = _first_locality(components)
        geocoded_province = components.county or ""
        geocoded_region = components.state or components.state_district or ""

        city_ok = fuzzy_match(geocoded_city, parsed.city)
        province_ok = not parsed.province or (
            fuzzy_match(geocoded_province, parsed.province) or fuzzy_match(geocoded_region, parsed.province)
        )

        if components.in_country(self._rules.country_code) and city_ok and province_ok:
            if parsed.postcode and components.postcode and components.postcode != parsed.postcode:
                diagnostics.append(
                    f'Postcode mismatch: found "{components.postcode}" instead of "{parsed.postcode}"'
                )
                return None
            bonus = 1
            if parsed.province and fuzzy_match(geocoded_province, parsed.province):
                bonus += 1
            if parsed.postcode and components.postcode == parsed.postcode:
                bonus += 1
            return bonus

        if geocoded_city and parsed.city and not city_ok:
            diagnostics.append(f'City mismatch: found "{geocoded_city}" instead of "{parsed.city}"')
        if parsed.province and geocoded_province and not fuzzy_match(geocoded_province, parsed.province):
            if self._rules.is_known_mismatch(geocoded_city, parsed.province, geocoded_province):
                diagnostics.append(
                    f'Invalid geographical combination: "{parsed.city}" is not in the province of "{parsed.province}"'
                )
            else:
                diagnostics.append(f'Province mismatch: found "{geocoded_province}" instead of "{parsed.province}"')
        return None


class CandidateSelector:
    """Choose the best candidate for a free-text address.

    Args:
        rules: Locale heuristics (road types, mismatch tables).
        ranker: Scoring fallback; defaults to a ``ResultRanker`` on the same rules.
    """

    def __init__(self, rules: LocaleRules = ITALIAN_RULES, ranker: ResultRanker | None = None) -> None:
        self._rules = rules
        self._ranker = ranker or ResultRanker(rules)

    @property
    def rules(self) -> LocaleRules:
        return self._rules

    def select(self, candidates: Sequence[GeocodeCandidate], original_address: str) -> Ok[GeocodeCandidate] | Err:
        """Tagged variant of ``select_best``: never raises a geocoding error."""
        try:
            return Ok(self.select_best(candidates, original_address))
        except GeocodeError as e:
            return Err(e)

    def select_best(self, candidates: Sequence[GeocodeCandidate], original_address: str) -> GeocodeCandidate:
        """Pick the candidate that best matches *original_address*.

        Args:
            candidates: Candidates in provider order. Never mutated.
            original_address: Address exactly as the user typed it.

        Returns:
            The selected candidate; it always has a road or a square.

        Raises:
            AddressValidationError: Candidates exist but none plausibly matches.
            NoResultsError: No usable candidate and no diagnostic to report.
        """
        parsed = parse_address(original_address, self._rules)
        usable = [c for c in candidates if c.components.has_road_or_square]

        if usable:
            if parsed.postcode:
                return self._match_postcode(usable, parsed)
            if parsed.street:
                return self._match_street(usable, parsed)
            return usable[0]

        logger.debug(f"No candidate with a road or square among {len(candidates)}, scoring all candidates")
        best = self._ranker.rank(candidates, parsed)
        if best is None:
            raise NoResultsError
        if not best.components.has_road_or_square:
            raise AddressValidationError(
                f"The address was resolved only to an area, not to a road or square. {_VERIFY}"
            )
        return best

    @staticmethod
    def _match_postcode(usable: list[GeocodeCandidate], parsed: ParsedAddress) -> GeocodeCandidate:
        """Require an exact postcode, preferring a candidate whose road also matches."""
        same_postcode = [c for c in usable if c.components.postcode == parsed.postcode]

        if parsed.street:
            for candidate in same_postcode:
                if candidate.components.road and fuzzy_match(candidate.components.road, parsed.street):
                    return candidate

        if same_postcode:
            return same_postcode[0]

        raise AddressValidationError(
            f"No result found with postcode {parsed.postcode} and a valid road or square. {_VERIFY}"
        )

    def _match_street(self, usable: list[GeocodeCandidate], parsed: ParsedAddress) -> GeocodeCandidate:
        """Match the road without its road type, then the city when one was given."""
        road_types = self._rules.road_types
        wanted_road = strip_road_type(parsed.street, road_types)
        road_matches = [
            c
            for c in usable
            if c.components.road and fuzzy_match(strip_road_type(c.components.road, road_types), wanted_road)
        ]

        if not parsed.city:
            if road_matches:
                return road_matches[0]
            raise AddressValidationError(
                f'No result found with street name "{parsed.street}". '
                "Please verify the entered address and insert the postcode if not present."
            )

        for candidate in road_matches:
            if any(strict_city_match(name, parsed.city) for name in candidate.components.localities):
                return candidate

        suggestion = ""
        if road_matches:
            suggested_city = road_matches[0].components.locality
            if suggested_city and suggested_city.lower() != parsed.city.lower():
                suggestion = f' Did you mean "{parsed.street}, {suggested_city}"?'
        postcode_hint = "" if parsed.postcode else " Try adding a postcode to improve accuracy."

        raise AddressValidationError(
            f'No result found with street name "{parsed.street}" and city "{parsed.city}".'
            f"{suggestion}{postcode_hint} {_VERIFY}"
        )
