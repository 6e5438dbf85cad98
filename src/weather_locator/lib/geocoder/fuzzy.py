"""Approximate string comparison for place and road names."""

# Maximum edit distance still treated as a typo
MAX_TYPO_DISTANCE = 2


def levenshtein_distance(a: str, b: str) -> int:
    """Return the edit distance between *a* and *b* (unit insert/delete/substitute)."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (char_a != char_b),
                )
            )
        previous = current
    return previous[-1]


def fuzzy_match(a: str | None, b: str | None) -> bool:
    """Compare two names tolerating case, whitespace, partial names and typos.

    Rules, in order, on lower-cased trimmed input:

    1. Exact equality.
    2. Same word count and one contains the other.
    3. One is a word-boundary prefix of the other and the shorter one has
       more than one word ("San Giovanni" ~ "San Giovanni Rotondo", but not
       "Monterotondo" ~ "Monterotondo Marittimo").
    4. Same word count and edit distance of at most ``MAX_TYPO_DISTANCE``.

    Args:
        a: First name.
        b: Second name.

    Returns:
        True if the names are considered the same place or road.
    """
    if not a or not b:
        return False

    s1 = a.strip().lower()
    s2 = b.strip().lower()
    if not s1 or not s2:
        return False

    if s1 == s2:
        return True

    words1 = s1.split()
    words2 = s2.split()
    same_word_count = len(words1) == len(words2)

    if same_word_count and (s1 in s2 or s2 in s1):
        return True

    shorter, longer = (s1, s2) if len(words1) <= len(words2) else (s2, s1)
    if len(shorter.split()) > 1 and longer.startswith(shorter + " "):
        return True

    return same_word_count and levenshtein_distance(s1, s2) <= MAX_TYPO_DISTANCE


def strict_city_match(geocoded: str | None, given: str | None) -> bool:
    """Fuzzy match that never accepts a geocoded name longer than the input.

    Rejects e.g. "Monterotondo Marittimo" for input "Monterotondo".
    """
    if not geocoded or not given:
        return False
    if len(geocoded.split()) > len(given.split()):
        return False
    return fuzzy_match(geocoded, given)
