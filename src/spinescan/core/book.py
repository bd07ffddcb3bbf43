# ABOUTME: The Book record produced by a scan, and the edits a reviewer can make to it.
# ABOUTME: Builds books from text or ISBN lookups and keeps the OCR title separate from the catalog title.

import uuid
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from spinescan.metadata.confidence import Confidence, ConfidenceStrategy
from spinescan.metadata.resolver import Resolution
from spinescan.metadata.types import CatalogRecord
from spinescan.parsing.isbn import clean_isbn
from spinescan.parsing.segmenter import ParsedCandidate

WORLDCAT_SEARCH_URL = "https://search.worldcat.org/search?q={isbn}&offset=1"


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Book:
    """One book found on a shelf photo.

    `preliminary_title` is always what OCR read and is never replaced by a
    lookup. `booktitle` holds the catalog title only, and stays empty while
    confidence is NONE. `candidates` keeps the source's alternatives so a
    reviewer can pick a different match.
    """

    preliminary_title: str = ""
    raw_ocr: str = ""
    booktitle: str = ""
    author: str = ""
    isbn: str = ""
    isbn_digital: str = ""
    cover: str = ""
    publisher: str = ""
    year: str = ""
    language: str = ""
    description: str = ""
    subjects: str = ""
    confidence: Confidence = Confidence.NONE
    candidates: list[CatalogRecord] = field(default_factory=list)
    source: str = ""
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "preliminary_title": self.preliminary_title,
            "raw_ocr": self.raw_ocr,
            "booktitle": self.booktitle,
            "author": self.author,
            "isbn": self.isbn,
            "isbn_digital": self.isbn_digital,
            "cover": self.cover,
            "publisher": self.publisher,
            "year": self.year,
            "language": self.language,
            "description": self.description,
            "subjects": self.subjects,
            "confidence": self.confidence.value,
            "source": self.source,
            "candidates": [c.to_dict() for c in self.candidates],
        }


def _catalog_fields(record: CatalogRecord) -> dict[str, str]:
    return {
        "booktitle": record.title,
        "author": record.author,
        "isbn": record.isbn,
        "isbn_digital": record.isbn_digital,
        "cover": record.cover,
        "publisher": record.publisher,
        "year": record.year,
        "language": record.language,
        "description": record.description,
        "subjects": record.subjects,
    }


def search_query(candidate: ParsedCandidate) -> str:
    """The string sent to catalogs for a candidate: its title, else all its text."""
    return candidate.possible_title or candidate.raw_text


def book_from_lookup(
    candidate: ParsedCandidate,
    resolution: Resolution,
    strategy: ConfidenceStrategy,
) -> Book:
    """Combine a parsed candidate with its catalog resolution.

    Catalog fields are only copied when the match rates above NONE; a
    rejected match still leaves its candidates for manual selection.
    """
    confidence = strategy.classify(search_query(candidate), resolution.best)
    book = Book(
        preliminary_title=candidate.possible_title or candidate.raw_text,
        raw_ocr=candidate.raw_text,
        author=candidate.possible_author,
        confidence=confidence,
        candidates=resolution.candidates,
    )
    if confidence is Confidence.NONE or resolution.best is None:
        return book

    fields = _catalog_fields(resolution.best)
    fields["author"] = fields["author"] or candidate.possible_author
    return replace(book, source=resolution.source, **fields)


def offline_book(candidate: ParsedCandidate) -> Book:
    """A book for a candidate that was never looked up."""
    return Book(
        preliminary_title=candidate.possible_title or candidate.raw_text,
        raw_ocr=candidate.raw_text,
        author=candidate.possible_author,
    )


def book_from_isbn(raw: str, resolution: Resolution, strategy: ConfidenceStrategy) -> Book:
    """Build a book for one barcode/ISBN read.

    An unmatched 13-digit ISBN gets a WorldCat search link as its title so
    the book can be looked up by hand.
    """
    isbn = clean_isbn(raw)
    confidence = strategy.classify(isbn, resolution.best)
    book = Book(
        preliminary_title=raw,
        raw_ocr=raw,
        isbn=isbn,
        confidence=confidence,
        candidates=resolution.candidates,
    )
    if resolution.best is not None and resolution.best.title:
        return replace(
            book,
            booktitle=resolution.best.title,
            author=resolution.best.author,
            isbn_digital=resolution.best.isbn_digital,
            cover=resolution.best.cover,
            publisher=resolution.best.publisher,
            year=resolution.best.year,
            language=resolution.best.language,
            description=resolution.best.description,
            subjects=resolution.best.subjects,
            source=resolution.source,
        )
    if confidence is Confidence.MEDIUM:
        return replace(book, booktitle=WORLDCAT_SEARCH_URL.format(isbn=isbn))
    return book


def select_candidate(book: Book, index: int) -> Book:
    """Return a copy of `book` using one of its alternative matches.

    A hand-picked match is rated MEDIUM. The OCR title is kept.

    Raises:
        IndexError: If the book has no candidate at `index`.
    """
    if not 0 <= index < len(book.candidates):
        raise IndexError(f"Book {book.id} has no candidate {index}")
    record = book.candidates[index]
    return replace(book, confidence=Confidence.MEDIUM, **_catalog_fields(record))


def new_manual_book() -> Book:
    """An empty book for something the scan missed."""
    return Book()


def count_by_confidence(books: Iterable[Book]) -> dict[Confidence, int]:
    """Number of books in each confidence tier (every tier present)."""
    counts = Counter(book.confidence for book in books)
    return {tier: counts.get(tier, 0) for tier in Confidence}
