"""Free-text address parsing and road-type normalization.

Splits a comma-delimited address into street / city / province / postcode /
country using positional templates, and cleans up road-type prefixes
("Via Viale Antonio Gramsci" -> "Via Antonio Gramsci").
"""

import re
from dataclasses import dataclass

from weather_locator.lib.geocoder.rules import ITALIAN_ROAD_TYPES, ITALIAN_RULES, LocaleRules

# Italian-style postcode: exactly 5 digits at word boundaries
_POSTCODE_PATTERN = re.compile(r"\b(\d{5})\b")


@dataclass(frozen=True)
class ParsedAddress:
    """Address fields derived from a free-text address."""

    street: str | None = None
    city: str | None = None
    province: str | None = None
    postcode: str | None = None
    country: str | None = None

    @property
    def county(self) -> str | None:
        """Alias of ``province`` used for non-Italian layouts."""
        return self.province

    def to_dict(self) -> dict[str, str | None]:
        return {
            "street": self.street,
            "city": self.city,
            "province": self.province,
            "postcode": self.postcode,
            "country": self.country,
        }


def strip_road_type(road: str | None, road_types: tuple[str, ...] = ITALIAN_ROAD_TYPES) -> str:
    """Remove a leading road type from a road name.

    Args:
        road: Road name, e.g. "Via Roma".
        road_types: Lower-case road-type words to strip.

    Returns:
        Lower-cased road name without its road type ("roma"), or the
        lower-cased trimmed input when it has no known road type.
    """
    if not road:
        return ""
    normalized = road.strip().lower()
    for road_type in road_types:
        if normalized.startswith(road_type + " "):
            return normalized[len(road_type) + 1 :].strip()
    return normalized


def dedupe_road_type(street: str, rules: LocaleRules = ITALIAN_RULES) -> str:
    """Drop a second consecutive road type from a street line.

    Handles both mixed ("Via Viale X" -> "Via X") and repeated
    ("Via Via X" -> "Via X") road types. Streets of two words or fewer are
    returned unchanged.
    """
    words = street.split()
    if len(words) > 2 and rules.is_road_type(words[0]) and rules.is_road_type(words[1]):
        del words[1]
        return " ".join(words)
    return street


def dedupe_query_text(address: str, rules: LocaleRules = ITALIAN_RULES) -> str:
    """Apply ``dedupe_road_type`` to the street segment of a full address."""
    parts = address.split(",")
    cleaned = dedupe_road_type(parts[0].strip(), rules)
    if cleaned == parts[0].strip():
        return address
    return ", ".join([cleaned, *(p.strip() for p in parts[1:])])


def find_postcode(parts: list[str]) -> str | None:
    """Return the first 5-digit token found in any segment."""
    for part in parts:
        match = _POSTCODE_PATTERN.search(part)
        if match:
            return match.group(1)
    return None


def _segment(parts: list[str], index: int) -> str | None:
    if index < len(parts) and parts[index]:
        return parts[index]
    return None


def parse_address(address: str, rules: LocaleRules = ITALIAN_RULES) -> ParsedAddress:
    """Parse a comma-delimited address into its fields.

    Layouts by number of segments:

    - 3: ``street, city, province`` (the last segment is only a postcode
      when it is a 5-digit token)
    - 4: ``street, city, province, postcode``
    - 5: ``country, street, city, county, postcode``
    - otherwise: ``street, city, province`` as far as segments go

    The postcode always comes from the first 5-digit token in any segment.

    Args:
        address: Free-text address.
        rules: Locale rules supplying the road-type vocabulary.

    Returns:
        ParsedAddress with empty segments left as None.
    """
    parts = [p.strip() for p in (address or "").split(",")]
    street_index = 1 if len(parts) == 5 else 0
    if parts[street_index]:
        parts[street_index] = dedupe_road_type(parts[street_index], rules)

    postcode = find_postcode(parts)

    if len(parts) == 3:
        last_is_postcode = bool(_POSTCODE_PATTERN.search(parts[2]))
        return ParsedAddress(
            street=_segment(parts, 0),
            city=_segment(parts, 1),
            province=None if last_is_postcode else _segment(parts, 2),
            postcode=postcode,
        )
    if len(parts) == 5:
        return ParsedAddress(
            country=_segment(parts, 0),
            street=_segment(parts, 1),
            city=_segment(parts, 2),
            province=_segment(parts, 3),
            postcode=postcode,
        )
    # 4 segments and every other count share the street-first layout
    return ParsedAddress(
        street=_segment(parts, 0),
        city=_segment(parts, 1),
        province=_segment(parts, 2),
        postcode=postcode,
    )
