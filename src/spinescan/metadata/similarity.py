# ABOUTME: Edit-distance string similarity used to rate catalog matches.
# ABOUTME: Levenshtein distance (via rapidfuzz) normalized by the longer string's length.

from rapidfuzz.distance import Levenshtein


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character edits turning `a` into `b`."""
    return Levenshtein.distance(a, b)


def string_similarity(a: str, b: str) -> float:
    """Case-insensitive similarity in [0.0, 1.0]; two empty strings are identical."""
    a, b = a.lower(), b.lower()
    if not a and not b:
        return 1.0
    return Levenshtein.normalized_similarity(a, b)
