# ABOUTME: Google Books catalog source.
# ABOUTME: Queries the volumes API and normalizes volumeInfo entries into CatalogRecords.

import logging
import re
from typing import Any

from spinescan.metadata.http import CatalogFetchError, HttpClient
from spinescan.metadata.types import MAX_CANDIDATES, CatalogRecord, as_text

logger = logging.getLogger(__name__)

_VOLUMES_URL = "https://www.googleapis.com/books/v1/volumes"
_YEAR_RE = re.compile(r"\d{4}")


def _identifier(identifiers: list[Any], kind: str) -> str:
    for entry in identifiers:
        if isinstance(entry, dict) and entry.get("type") == kind:
            return as_text(entry.get("identifier"))
    return ""


def _strings(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [as_text(v) for v in value if v is not None]


def parse_volume(item: dict[str, Any]) -> CatalogRecord:
    """Parse one `items[]` entry. ISBN-13 wins over ISBN-10 for the print ISBN."""
    info = item.get("volumeInfo") or {}
    identifiers = info.get("industryIdentifiers") or []
    isbn13 = _identifier(identifiers, "ISBN_13")
    isbn10 = _identifier(identifiers, "ISBN_10")
    authors = _strings(info.get("authors"))
    image_links = info.get("imageLinks") or {}
    published = as_text(info.get("publishedDate"))
    year = _YEAR_RE.search(published)

    return CatalogRecord(
        title=as_text(info.get("title")),
        author=authors[0] if authors else "",
        isbn=isbn13 or isbn10,
        isbn_digital=isbn13,
        cover=as_text(image_links.get("thumbnail")),
        publisher=as_text(info.get("publisher")),
        year=year.group() if year else published,
        language=as_text(info.get("language")),
        description=as_text(info.get("description")),
        subjects=", ".join(_strings(info.get("categories"))),
    )


def parse_volumes(data: dict[str, Any]) -> list[CatalogRecord]:
    """Parse a volumes response into at most five records."""
    items = data.get("items") or []
    return [parse_volume(item) for item in items[:MAX_CANDIDATES]]


class GoogleBooksSource:
    """Catalog source backed by the Google Books volumes API.

    Works without an API key at a lower anonymous quota; the key is sent
    when configured.
    """

    def __init__(self, http_client: HttpClient, api_key: str = "") -> None:
        self._http = http_client
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "googlebooks"

    @property
    def available(self) -> bool:
        return True

    def isbn_query(self, isbn: str) -> str:
        return f"isbn:{isbn}"

    def search(self, query: str) -> list[CatalogRecord]:
        """Search Google Books by free text.

        Raises:
            CatalogFetchError: If the request fails or the response is malformed.
        """
        params = {"q": query, "maxResults": str(MAX_CANDIDATES)}
        if self._api_key:
            params["key"] = self._api_key
        data = self._http.get(_VOLUMES_URL, params=params)
        try:
            records = parse_volumes(data)
        except (AttributeError, TypeError) as exc:
            raise CatalogFetchError(f"Unexpected Google Books response for {query!r}") from exc
        logger.debug("Google Books returned %d record(s) for %r", len(records), query)
        return records
