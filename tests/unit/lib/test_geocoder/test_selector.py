"""Unit tests for candidate selection."""

import copy

import pytest

from weather_locator.lib.geocoder.base import CandidateComponents, GeocodeCandidate
from weather_locator.lib.geocoder.errors import AddressValidationError, GeocodeError, NoResultsError
from weather_locator.lib.geocoder.result import Err, Ok
from weather_locator.lib.geocoder.rules import LocaleRules
from weather_locator.lib.geocoder.selector import CandidateSelector


def _candidate(confidence: int = 9, formatted: str = "", **components: str) -> GeocodeCandidate:
    return GeocodeCandidate(
        latitude=43.77,
        longitude=11.25,
        confidence=confidence,
        components=CandidateComponents(**components),
        formatted=formatted,
    )


@pytest.fixture
def selector() -> CandidateSelector:
    return CandidateSelector()


class TestPostcodeBranch:
    """Tests for addresses that carry a postcode."""

    def test_postcode_and_road_beat_confidence(self, selector: CandidateSelector) -> None:
        """A matching postcode and road wins over a higher raw confidence."""
        milano = _candidate(9, road="Via Roma", city="Milano", postcode="20100")
        firenze = _candidate(8, road="Via Roma", city="Firenze", postcode="50100")
        assert selector.select_best([milano, firenze], "Via Roma, Firenze, 50100") is firenze

    def test_prefers_matching_road(self, selector: CandidateSelector) -> None:
        verdi = _candidate(road="Via Verdi", postcode="50100")
        roma = _candidate(road="Via Roma", postcode="50100")
        assert selector.select_best([verdi, roma], "Via Roma, Firenze, 50100") is roma

    def test_postcode_only(self, selector: CandidateSelector) -> None:
        """Without a road match the first candidate with the postcode is used."""
        other = _candidate(road="Via Verdi", postcode="20100")
        verdi = _candidate(road="Via Verdi", postcode="50100")
        assert selector.select_best([other, verdi], "Via Roma, Firenze, 50100") is verdi

    def test_square_counts_as_usable(self, selector: CandidateSelector) -> None:
        square = _candidate(square="Piazza della Signoria", postcode="50122")
        assert selector.select_best([square], "Piazza della Signoria, Firenze, 50122") is square

    def test_no_candidate_with_postcode(self, selector: CandidateSelector) -> None:
        candidates = [_candidate(road="Via Roma", postcode="20100")]
        with pytest.raises(AddressValidationError, match="postcode 50100 and a valid road or square"):
            selector.select_best(candidates, "Via Roma, Firenze, 50100")


class TestStreetBranch:
    """Tests for addresses with a street but no postcode."""

    def test_road_and_city(self, selector: CandidateSelector) -> None:
        milano = _candidate(road="Via Roma", city="Milano")
        firenze = _candidate(road="Via Roma", city="Firenze")
        assert selector.select_best([milano, firenze], "Via Roma, Firenze") is firenze

    def test_road_type_ignored(self, selector: CandidateSelector) -> None:
        """"Via Roma" matches a provider road reported as "Viale Roma"."""
        viale = _candidate(road="Viale Roma", city="Firenze")
        assert selector.select_best([viale], "Via Roma, Firenze") is viale

    def test_city_from_town_village_or_hamlet(self, selector: CandidateSelector) -> None:
        hamlet = _candidate(road="Via Roma", city="Fiesole", hamlet="Settignano")
        assert selector.select_best([hamlet], "Via Roma, Settignano") is hamlet

    def test_longer_city_rejected_with_suggestion(self, selector: CandidateSelector) -> None:
        """"Monterotondo" never resolves to "Monterotondo Marittimo"."""
        candidates = [_candidate(road="Via Roma", town="Monterotondo Marittimo")]
        with pytest.raises(AddressValidationError) as exc_info:
            selector.select_best(candidates, "Via Roma, Monterotondo")
        assert str(exc_info.value) == (
            'VALIDATION_ERROR: No result found with street name "Via Roma" and city "Monterotondo". '
            'Did you mean "Via Roma, Monterotondo Marittimo"? '
            "Try adding a postcode to improve accuracy. Please verify the entered address."
        )

    def test_no_suggestion_without_road_match(self, selector: CandidateSelector) -> None:
        candidates = [_candidate(road="Via Verdi", city="Lucca")]
        with pytest.raises(AddressValidationError) as exc_info:
            selector.select_best(candidates, "Via Garibaldi, Pisa")
        message = str(exc_info.value)
        assert "Did you mean" not in message
        assert "Try adding a postcode" in message

    def test_road_without_city(self, selector: CandidateSelector) -> None:
        verdi = _candidate(road="Via Verdi", city="Lucca")
        roma = _candidate(road="Via Roma", city="Lucca")
        assert selector.select_best([verdi, roma], "Via Roma") is roma

    def test_road_without_city_no_match(self, selector: CandidateSelector) -> None:
        candidates = [_candidate(road="Via Verdi")]
        with pytest.raises(AddressValidationError, match="insert the postcode if not present"):
            selector.select_best(candidates, "Via Roma")

    def test_alternate_locale_rules(self) -> None:
        """Road types come from the selector's rules, not a global table."""
        rivoli = _candidate(road="Rivoli", city="Paris")
        french = CandidateSelector(LocaleRules(country_code="fr", road_types=("rue",)))
        assert french.select_best([rivoli], "Rue Rivoli, Paris") is rivoli
        with pytest.raises(AddressValidationError):
            CandidateSelector().select_best([rivoli], "Rue Rivoli, Paris")


class TestNoStreetNoPostcode:
    """Tests for addresses without street and postcode."""

    def test_first_usable_candidate(self, selector: CandidateSelector) -> None:
        area = _candidate(city="Firenze")
        road = _candidate(road="Via Roma", city="Firenze")
        assert selector.select_best([area, road], "Italia, , Firenze, FI, ") is road


class TestScoringFallback:
    """Tests for candidates that lack a road and a square."""

    def test_area_only_candidate_never_returned(self, selector: CandidateSelector) -> None:
        candidates = [_candidate(10, city="Firenze", country_code="it")]
        with pytest.raises(GeocodeError) as exc_info:
            selector.select_best(candidates, "Firenze")
        assert isinstance(exc_info.value, AddressValidationError | NoResultsError)
        assert exc_info.value.message

    def test_low_confidence_reported(self, selector: CandidateSelector) -> None:
        candidates = [_candidate(7, city="Firenze", country_code="it")]
        with pytest.raises(AddressValidationError, match=r"Low confidence \(7/10\)"):
            selector.select_best(candidates, "Via Roma, Firenze, 50100")

    def test_known_mismatch_message(self, selector: CandidateSelector) -> None:
        """Firenze in the province of Milano is an invalid combination."""
        candidates = [_candidate(9, city="Firenze", county="Firenze", state="Toscana", country_code="it")]
        with pytest.raises(AddressValidationError) as exc_info:
            selector.select_best(candidates, "Via Roma, Firenze, Milano")
        assert 'Invalid geographical combination: "Firenze" is not in the province of "Milano"' in str(
            exc_info.value
        )

    def test_plain_province_mismatch_message(self, selector: CandidateSelector) -> None:
        candidates = [_candidate(9, city="Lucca", county="Lucca", state="Toscana", country_code="it")]
        with pytest.raises(AddressValidationError) as exc_info:
            selector.select_best(candidates, "Via Roma, Lucca, Pisa")
        message = str(exc_info.value)
        assert 'Province mismatch: found "Lucca" instead of "Pisa"' in message
        assert "Invalid geographical combination" not in message

    def test_empty_candidates(self, selector: CandidateSelector) -> None:
        with pytest.raises(NoResultsError):
            selector.select_best([], "Via Roma, Firenze")


class TestSelectTagged:
    """Tests for the tagged-result seam."""

    def test_ok(self, selector: CandidateSelector) -> None:
        roma = _candidate(road="Via Roma", city="Firenze")
        outcome = selector.select([roma], "Via Roma, Firenze")
        assert isinstance(outcome, Ok)
        assert outcome.value is roma

    def test_err(self, selector: CandidateSelector) -> None:
        outcome = selector.select([], "Via Roma, Firenze")
        assert isinstance(outcome, Err)
        assert outcome.message.startswith("NO_RESULTS:")


class TestIdempotence:
    """Tests that selection is repeatable and side-effect free."""

    def test_same_result_twice(self, selector: CandidateSelector) -> None:
        candidates = [
            _candidate(9, road="Via Roma", city="Milano", postcode="20100"),
            _candidate(8, road="Via Roma", city="Firenze", postcode="50100"),
        ]
        snapshot = copy.deepcopy(candidates)
        first = selector.select_best(candidates, "Via Roma, Firenze, 50100")
        second = selector.select_best(candidates, "Via Roma, Firenze, 50100")
        assert first is second
        assert candidates == snapshot
