# ABOUTME: Multi-source catalog resolution with caching and per-source throttling.
# ABOUTME: Tries sources in fixed priority order and stops at the first titled match.

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from spinescan.metadata.cache import LookupCache
from spinescan.metadata.http import CatalogFetchError, SpinescanHttpClient
from spinescan.metadata.provider import CatalogSource
from spinescan.metadata.throttle import RateLimiter
from spinescan.metadata.types import CatalogRecord, LookupResult

logger = logging.getLogger(__name__)

# Fixed priority order; every lookup mode is a prefix-preserving subset of it.
SOURCE_PRIORITY = ("openlibrary", "googlebooks", "europeana")

LOOKUP_MODES: dict[str, tuple[str, ...]] = {
    "openlibrary": ("openlibrary",),
    "googlebooks": ("googlebooks",),
    "europeana": ("europeana",),
    "both": ("openlibrary", "googlebooks"),
    "all": SOURCE_PRIORITY,
}


def sources_for(lookup_source: str) -> tuple[str, ...]:
    """Source names for a lookup mode, in priority order.

    Raises:
        ValueError: If the mode is unknown.
    """
    try:
        return LOOKUP_MODES[lookup_source]
    except KeyError:
        choices = ", ".join(LOOKUP_MODES)
        raise ValueError(
            f"Unknown lookup source {lookup_source!r} (choose from {choices})"
        ) from None


@dataclass
class Resolution:
    """Outcome of resolving one query: the winning source's result, if any."""

    result: LookupResult | None = None
    source: str = ""

    @property
    def best(self) -> CatalogRecord | None:
        return self.result.best if self.result is not None else None

    @property
    def candidates(self) -> list[CatalogRecord]:
        return list(self.result.candidates) if self.result is not None else []


class CatalogResolver:
    """Resolves search strings against an ordered set of catalog sources.

    Sources are never merged or cross-checked: the first source whose best
    match has a title wins. A failing source is logged and skipped.
    `http_client`, when given, is the transport the resolver owns and
    shuts down on `close()`.
    """

    def __init__(
        self,
        sources: Iterable[CatalogSource],
        *,
        cache: LookupCache | None = None,
        rate_limiter: RateLimiter | None = None,
        http_client: SpinescanHttpClient | None = None,
    ) -> None:
        self._sources = {source.name: source for source in sources}
        self._cache = cache
        self._rate_limiter = rate_limiter or RateLimiter()
        self._http_client = http_client

    @property
    def source_names(self) -> list[str]:
        return list(self._sources)

    def get_source(self, name: str) -> CatalogSource | None:
        return self._sources.get(name)

    def _ordered(self, names: Sequence[str] | None) -> list[CatalogSource]:
        wanted = SOURCE_PRIORITY if names is None else names
        ordered = [name for name in SOURCE_PRIORITY if name in wanted]
        ordered += [name for name in wanted if name not in SOURCE_PRIORITY]
        return [self._sources[name] for name in ordered if name in self._sources]

    def lookup(self, source: CatalogSource, query: str) -> LookupResult | None:
        """Query one source, consulting the cache first.

        Returns None when the source is unavailable, finds nothing, or fails.
        """
        if not source.available:
            logger.debug("Skipping unavailable source %s", source.name)
            return None

        if self._cache is not None:
            cached = self._cache.get(source.name, query)
            if cached is not None:
                logger.debug("Cache hit for %s:%r", source.name, query)
                return cached

        self._rate_limiter.throttle(source.name)
        try:
            records = source.search(query)
        except CatalogFetchError as exc:
            logger.warning("Lookup failed on %s for %r: %s", source.name, query, exc)
            return None
        except Exception:
            logger.warning("Unexpected error from %s for %r", source.name, query, exc_info=True)
            return None

        result = LookupResult.from_records(records)
        if result is not None and self._cache is not None:
            self._cache.set(source.name, query, result)
        return result

    def resolve(self, query: str, names: Sequence[str] | None = None) -> Resolution:
        """Resolve a free-text query against the named sources in priority order."""
        for source in self._ordered(names):
            result = self.lookup(source, query)
            if result is not None and result.has_title:
                return Resolution(result=result, source=source.name)
        return Resolution()

    def resolve_isbn(self, isbn: str, names: Sequence[str] | None = None) -> Resolution:
        """Resolve a cleaned ISBN using each source's ISBN-scoped query syntax."""
        for source in self._ordered(names):
            result = self.lookup(source, source.isbn_query(isbn))
            if result is not None and result.has_title:
                return Resolution(result=result, source=source.name)
        return Resolution()

    def close(self) -> None:
        """Release the cache connection and any owned HTTP client."""
        if self._cache is not None:
            self._cache.close()
        if self._http_client is not None:
            self._http_client.close()
