# ABOUTME: Europeana cultural-heritage catalog source.
# ABOUTME: Needs an API key; resolves language-keyed fields with an nl -> en -> def fallback.

import logging
import re
from typing import Any

from spinescan.metadata.http import CatalogFetchError, HttpClient
from spinescan.metadata.types import MAX_CANDIDATES, CatalogRecord, as_text

logger = logging.getLogger(__name__)

_SEARCH_URL = "https://api.europeana.eu/record/v2/search.json"
_LANGUAGE_PREFERENCE = ("nl", "en", "def")
_ISBN_RE = re.compile(r"97[89]\d{10}|\d{9}[\dX]")


def resolve_lang_aware(value: Any) -> str:
    """Pick one string out of a language-keyed map like `{"en": ["Title"]}`.

    Tries nl, en, then def, then the first key present. Map values may be
    lists or plain strings.
    """
    if not isinstance(value, dict) or not value:
        return _first_text(value)
    for lang in _LANGUAGE_PREFERENCE:
        text = _first_text(value.get(lang))
        if text:
            return text
    for entry in value.values():
        text = _first_text(entry)
        if text:
            return text
    return ""


def _first_text(value: Any) -> str:
    if isinstance(value, list):
        return as_text(value[0]) if value else ""
    if isinstance(value, dict):
        return ""
    return as_text(value)


def _find_isbn(item: dict[str, Any]) -> str:
    for identifier in item.get("dcIdentifier") or []:
        match = _ISBN_RE.search(str(identifier).replace("-", ""))
        if match:
            return match.group()
    return ""


def parse_item(item: dict[str, Any]) -> CatalogRecord:
    """Parse one search `items[]` entry."""
    isbn = _find_isbn(item)
    title = resolve_lang_aware(item.get("dcTitleLangAware")) or _first_text(item.get("title"))
    author = resolve_lang_aware(item.get("dcCreatorLangAware")) or _first_text(
        item.get("dcCreator")
    )
    subjects = item.get("dcSubjectLangAware")
    return CatalogRecord(
        title=title,
        author=author,
        isbn=isbn,
        isbn_digital=isbn if len(isbn) == 13 else "",
        cover=_first_text(item.get("edmPreview")),
        publisher=resolve_lang_aware(item.get("dcPublisherLangAware")),
        year=_first_text(item.get("year")),
        language=_first_text(item.get("dcLanguage")) or _first_text(item.get("language")),
        description=resolve_lang_aware(item.get("dcDescriptionLangAware"))
        or _first_text(item.get("dcDescription")),
        subjects=resolve_lang_aware(subjects) if subjects else "",
    )


def parse_search_results(data: dict[str, Any]) -> list[CatalogRecord]:
    """Parse a Europeana search response into at most five records."""
    items = data.get("items") or []
    return [parse_item(item) for item in items[:MAX_CANDIDATES]]


class EuropeanaSource:
    """Catalog source backed by the Europeana Search API.

    Europeana requires a personal API key (`wskey`). Without one the source
    is unavailable and searching returns nothing instead of failing, so it
    can stay in a multi-source order unconfigured.
    """

    def __init__(self, http_client: HttpClient, api_key: str = "") -> None:
        self._http = http_client
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "europeana"

    @property
    def available(self) -> bool:
        return bool(self._api_key)

    def isbn_query(self, isbn: str) -> str:
        return isbn

    def search(self, query: str) -> list[CatalogRecord]:
        """Search Europeana by free text; empty when no API key is configured.

        Raises:
            CatalogFetchError: If the request fails or the response is malformed.
        """
        if not self.available:
            return []
        params = {"query": query, "rows": str(MAX_CANDIDATES), "wskey": self._api_key}
        data = self._http.get(_SEARCH_URL, params=params)
        try:
            records = parse_search_results(data)
        except (AttributeError, TypeError) as exc:
            raise CatalogFetchError(f"Unexpected Europeana response for {query!r}") from exc
        logger.debug("Europeana returned %d record(s) for %r", len(records), query)
        return records
