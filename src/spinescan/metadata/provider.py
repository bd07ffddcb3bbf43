# ABOUTME: CatalogSource protocol defining the contract for bibliographic lookup sources.
# ABOUTME: Open Library, Google Books and Europeana each implement it as an adapter.

from typing import Protocol, runtime_checkable

from spinescan.metadata.types import CatalogRecord


@runtime_checkable
class CatalogSource(Protocol):
    """Protocol for catalog lookup services.

    `search` returns the source's own relevance-ranked matches already
    normalized to CatalogRecord, and raises CatalogFetchError when the
    request fails. A source that cannot run (e.g. missing credentials)
    reports `available` as False and is skipped without error.
    """

    @property
    def name(self) -> str: ...

    @property
    def available(self) -> bool: ...

    def search(self, query: str) -> list[CatalogRecord]: ...

    def isbn_query(self, isbn: str) -> str: ...
