"""Locale heuristics: road-type vocabulary and known city/province mismatches.

The tables are bundled into an immutable ``LocaleRules`` value owned by the
candidate selector, so an alternate locale (or a test double) can be passed
in without touching module state.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# Italian road types ("via", "piazza", ...) recognised at the start of a street
ITALIAN_ROAD_TYPES: tuple[str, ...] = (
    "via",
    "viale",
    "piazza",
    "corso",
    "largo",
    "vicolo",
    "strada",
    "piazzale",
)

# City -> province names it is known NOT to belong to
_CITY_FORBIDDEN_PROVINCES: dict[str, tuple[str, ...]] = {
    "firenze": ("milano", "milan"),
    "rome": ("milano", "milan"),
    "roma": ("milano", "milan"),
    "napoli": ("milano", "milan"),
    "naples": ("milano", "milan"),
    "torino": ("roma", "rome"),
    "turin": ("roma", "rome"),
    "palermo": ("milano", "milan", "roma", "rome"),
    "catania": ("milano", "milan", "roma", "rome"),
}

# Major province -> aliases the provider may report for it
_MAJOR_PROVINCE_ALIASES: dict[str, tuple[str, ...]] = {
    "milano": ("milan", "mi"),
    "roma": ("rome", "rm"),
    "napoli": ("naples", "na"),
    "torino": ("turin", "to"),
    "firenze": ("florence", "fi"),
    "bologna": ("bo",),
    "venezia": ("venice", "ve"),
}

# Keywords that make an unrestricted query worth biasing towards Italy
_ITALIAN_KEYWORDS: tuple[str, ...] = (
    "milano",
    "roma",
    "napoli",
    "torino",
    "firenze",
    "bologna",
    "venezia",
    "italia",
)


@dataclass(frozen=True, eq=False)
class LocaleRules:
    """Immutable heuristic tables for one locale."""

    country_code: str
    road_types: tuple[str, ...]
    city_forbidden_provinces: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    major_province_aliases: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    keywords: tuple[str, ...] = ()

    def is_road_type(self, word: str) -> bool:
        return word.lower() in self.road_types

    def is_known_mismatch(self, city: str, input_province: str, geocoded_province: str) -> bool:
        """Check whether a city/province pairing is a known geographic impossibility.

        A city listed in the direct table is judged only by that table. Otherwise,
        if the input province names a major province, the geocoded province must
        mention that province or one of its aliases.

        Args:
            city: City reported by the provider.
            input_province: Province typed by the user.
            geocoded_province: Province (county) reported by the provider.

        Returns:
            True if the combination is known to be wrong.
        """
        city_lower = (city or "").lower()
        input_lower = (input_province or "").lower()
        geocoded_lower = (geocoded_province or "").lower()

        forbidden = self.city_forbidden_provinces.get(city_lower)
        if forbidden is not None:
            return input_lower in forbidden

        for province, aliases in self.major_province_aliases.items():
            if province not in input_lower:
                continue
            same_province = province in geocoded_lower or any(alias in geocoded_lower for alias in aliases)
            if not same_province:
                return True

        return False

    def mentions_locale(self, text: str) -> bool:
        """Whether *text* contains any of this locale's keywords."""
        lower = text.lower()
        return any(keyword in lower for keyword in self.keywords)


ITALIAN_RULES = LocaleRules(
    country_code="it",
    road_types=ITALIAN_ROAD_TYPES,
    city_forbidden_provinces=MappingProxyType(_CITY_FORBIDDEN_PROVINCES),
    major_province_aliases=MappingProxyType(_MAJOR_PROVINCE_ALIASES),
    keywords=_ITALIAN_KEYWORDS,
)
