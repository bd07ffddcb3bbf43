# ABOUTME: Open Library catalog source.
# ABOUTME: Queries openlibrary.org's search endpoint and normalizes the top five docs.

import logging

from spinescan.metadata.http import CatalogFetchError, HttpClient
from spinescan.metadata.openlibrary_parser import parse_search_results
from spinescan.metadata.types import MAX_CANDIDATES, CatalogRecord

logger = logging.getLogger(__name__)

_OL_BASE = "https://openlibrary.org"


class OpenLibrarySource:
    """Catalog source backed by the Open Library search API.

    Open Library publishes a usage policy, so the resolver throttles this
    source to one request per second.
    """

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "openlibrary"

    @property
    def available(self) -> bool:
        return True

    def isbn_query(self, isbn: str) -> str:
        return f"isbn:{isbn}"

    def search(self, query: str) -> list[CatalogRecord]:
        """Search Open Library by free text.

        Raises:
            CatalogFetchError: If the request fails or the response is malformed.
        """
        params = {"q": query, "limit": str(MAX_CANDIDATES)}
        data = self._http.get(f"{_OL_BASE}/search.json", params=params)
        try:
            records = parse_search_results(data)
        except (AttributeError, TypeError) as exc:
            raise CatalogFetchError(f"Unexpected Open Library response for {query!r}") from exc
        logger.debug("Open Library returned %d record(s) for %r", len(records), query)
        return records
