# ABOUTME: The scan pipeline from OCR output to Book records, driven by an explicit ScanContext.
# ABOUTME: Covers single pages, barcode/ISBN scans, offline scans, and sequential batches.

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from spinescan.config import Settings
from spinescan.core.book import (
    Book,
    book_from_isbn,
    book_from_lookup,
    offline_book,
    search_query,
)
from spinescan.layout.vision import OcrInputError, OcrPage, load_ocr_file
from spinescan.metadata.cache import LookupCache
from spinescan.metadata.confidence import strategy_for
from spinescan.metadata.europeana import EuropeanaSource
from spinescan.metadata.googlebooks import GoogleBooksSource
from spinescan.metadata.http import HttpClient, SpinescanHttpClient
from spinescan.metadata.openlibrary import OpenLibrarySource
from spinescan.metadata.resolver import CatalogResolver, Resolution, sources_for
from spinescan.metadata.throttle import RateLimiter
from spinescan.parsing.isbn import clean_isbn, extract_isbns
from spinescan.parsing.segmenter import ParsedCandidate, parse_ocr_text, segment_groups

logger = logging.getLogger(__name__)

# OCR output shorter than this (after trimming) counts as no text at all.
MIN_TEXT_LENGTH = 3

NO_TEXT_MESSAGE = (
    "No text detected. Try better lighting, a different angle, or a higher "
    "resolution image. You can also add books manually."
)
NO_ISBN_MESSAGE = "No ISBNs detected. Try scanning without barcode mode."


@dataclass
class ScanContext:
    """Everything a pipeline stage may consult.

    Stages read from the context and return results; they never store
    books on it. A context without a resolver scans offline.
    """

    settings: Settings
    resolver: CatalogResolver | None = None

    @property
    def online(self) -> bool:
        return self.resolver is not None and not self.settings.offline

    def close(self) -> None:
        if self.resolver is not None:
            self.resolver.close()


@dataclass
class ScanResult:
    """Books found in one OCR input, plus guidance when nothing was found."""

    books: list[Book] = field(default_factory=list)
    message: str = ""


@dataclass
class BatchError:
    """One input that failed as a whole during a batch."""

    name: str
    message: str


@dataclass
class BatchResult:
    """Books from every input of a batch, in input order, and per-input failures."""

    books: list[Book] = field(default_factory=list)
    errors: list[BatchError] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)


def build_resolver(
    settings: Settings,
    http_client: HttpClient | None = None,
    cache: LookupCache | None = None,
    rate_limiter: RateLimiter | None = None,
) -> CatalogResolver:
    """Wire up every catalog source from settings."""
    owned: SpinescanHttpClient | None = None
    if http_client is None:
        http_client = owned = SpinescanHttpClient()
    if cache is None and settings.cache_path is not None:
        cache = LookupCache(settings.cache_path)
    if rate_limiter is None:
        rate_limiter = RateLimiter({"openlibrary": settings.openlibrary_interval})
    return CatalogResolver(
        [
            OpenLibrarySource(http_client),
            GoogleBooksSource(http_client, api_key=settings.google_api_key),
            EuropeanaSource(http_client, api_key=settings.europeana_api_key),
        ],
        cache=cache,
        rate_limiter=rate_limiter,
        http_client=owned,
    )


def build_context(settings: Settings, http_client: HttpClient | None = None) -> ScanContext:
    """Create a ScanContext, with no resolver at all when offline."""
    if settings.offline:
        return ScanContext(settings=settings)
    return ScanContext(settings=settings, resolver=build_resolver(settings, http_client))


def candidates_for_page(page: OcrPage) -> list[ParsedCandidate]:
    """Segment a page: spine groups when the OCR engine gave positions, else its text."""
    if page.is_structured:
        return segment_groups(page.groups)
    return parse_ocr_text(page.text)


def resolve_candidates(context: ScanContext, candidates: Iterable[ParsedCandidate]) -> list[Book]:
    """Look each candidate up, one at a time, and rate the match.

    A candidate whose lookup or rating fails is kept as an unmatched book
    so one bad spine never costs the rest of the shelf.
    """
    if not context.online:
        return [offline_book(candidate) for candidate in candidates]

    assert context.resolver is not None
    names = sources_for(context.settings.lookup_source)
    strategy = strategy_for(is_isbn=False)
    books: list[Book] = []
    for candidate in candidates:
        try:
            resolution = context.resolver.resolve(search_query(candidate), names)
            books.append(book_from_lookup(candidate, resolution, strategy))
        except Exception as exc:
            logger.warning("Lookup failed for %r: %s", candidate.possible_title, exc)
            books.append(offline_book(candidate))
    return books


def scan_isbns(context: ScanContext, isbns: Iterable[str]) -> list[Book]:
    """Barcode mode: resolve ISBN reads directly, bypassing the segmenter.

    Reads without any digits are dropped. Every available source is tried
    in priority order regardless of the configured lookup mode.
    """
    strategy = strategy_for(is_isbn=True)
    books: list[Book] = []
    for raw in isbns:
        raw = raw.strip()
        isbn = clean_isbn(raw)
        if not isbn:
            continue
        resolution = Resolution()
        if context.online:
            assert context.resolver is not None
            try:
                resolution = context.resolver.resolve_isbn(isbn)
            except Exception as exc:
                logger.warning("ISBN lookup failed for %s: %s", isbn, exc)
        books.append(book_from_isbn(raw, resolution, strategy))
    return books


def isbns_in_text(text: str) -> list[str]:
    """ISBNs found in OCR text, or its non-empty lines if none look like ISBNs."""
    found = extract_isbns(text)
    if found:
        return found
    return [line.strip() for line in text.splitlines() if line.strip()]


def scan_page(context: ScanContext, page: OcrPage) -> ScanResult:
    """Run the whole pipeline for one photo's OCR output."""
    if len(page.text.strip()) < MIN_TEXT_LENGTH:
        if context.settings.barcode_mode:
            return ScanResult(message=NO_ISBN_MESSAGE)
        return ScanResult(message=NO_TEXT_MESSAGE)

    if context.settings.barcode_mode:
        books = scan_isbns(context, isbns_in_text(page.text))
        return ScanResult(books=books, message="" if books else NO_ISBN_MESSAGE)

    candidates = candidates_for_page(page)
    logger.info("Parsed %d candidate(s)", len(candidates))
    return ScanResult(books=resolve_candidates(context, candidates))


def scan_text(context: ScanContext, text: str) -> ScanResult:
    """Run the pipeline on plain OCR text."""
    return scan_page(context, OcrPage(text=text))


def process_batch(
    context: ScanContext,
    paths: Iterable[Path],
    loader: Callable[[Path], OcrPage] = load_ocr_file,
    on_progress: Callable[[Path], None] | None = None,
) -> BatchResult:
    """Scan several OCR inputs one after another.

    Each input's full pipeline completes before the next starts. An input
    that cannot be loaded or whose scan fails is recorded as a BatchError
    and the batch goes on.
    """
    batch = BatchResult()
    for path in paths:
        if on_progress is not None:
            on_progress(path)
        try:
            page = loader(path)
            result = scan_page(context, page)
        except (OcrInputError, OSError) as exc:
            logger.warning("Skipping %s: %s", path, exc)
            batch.errors.append(BatchError(name=path.name, message=str(exc)))
            continue
        except Exception as exc:
            logger.warning("Scan of %s failed", path, exc_info=True)
            batch.errors.append(BatchError(name=path.name, message=str(exc) or type(exc).__name__))
            continue
        batch.books.extend(result.books)
        if result.message:
            batch.messages.append(f"{path.name}: {result.message}")
    return batch
