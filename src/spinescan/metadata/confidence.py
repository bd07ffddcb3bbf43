# ABOUTME: Confidence tiers for resolved books and the strategies that assign them.
# ABOUTME: Text lookups are rated by title similarity; ISBN lookups by whether anything matched.

from enum import Enum
from typing import Protocol, runtime_checkable

from spinescan.metadata.similarity import string_similarity
from spinescan.metadata.types import CatalogRecord
from spinescan.parsing.isbn import is_isbn13

HIGH_THRESHOLD = 0.85
MEDIUM_THRESHOLD = 0.5


class Confidence(str, Enum):
    """How far a resolved book can be trusted without review."""

    NONE = "none"
    MEDIUM = "medium"
    HIGH = "high"


def classify_similarity(similarity: float) -> Confidence:
    """Map a similarity score to a tier. Both thresholds are exclusive."""
    if similarity > HIGH_THRESHOLD:
        return Confidence.HIGH
    if similarity > MEDIUM_THRESHOLD:
        return Confidence.MEDIUM
    return Confidence.NONE


@runtime_checkable
class ConfidenceStrategy(Protocol):
    """Rates a lookup given the query that produced it and the best record."""

    def classify(self, query: str, record: CatalogRecord | None) -> Confidence: ...


class SimilarityConfidence:
    """For free-text lookups: OCR titles are uncertain, so compare them to the match."""

    def classify(self, query: str, record: CatalogRecord | None) -> Confidence:
        if record is None or not record.title:
            return Confidence.NONE
        return classify_similarity(string_similarity(query, record.title))


class IsbnPresenceConfidence:
    """For barcode lookups: a correctly read ISBN is unambiguous.

    Any titled match is high confidence. Without a match, a 13-digit code
    is still probably valid and worth following up by hand.
    """

    def classify(self, query: str, record: CatalogRecord | None) -> Confidence:
        if record is not None and record.title:
            return Confidence.HIGH
        if is_isbn13(query):
            return Confidence.MEDIUM
        return Confidence.NONE


def strategy_for(is_isbn: bool) -> ConfidenceStrategy:
    """Pick the classification strategy for a candidate type."""
    return IsbnPresenceConfidence() if is_isbn else SimilarityConfidence()
