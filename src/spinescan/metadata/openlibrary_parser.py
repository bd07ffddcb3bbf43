# ABOUTME: Parsing functions for Open Library search API JSON responses.
# ABOUTME: Converts OL search docs into normalized CatalogRecords.

from typing import Any

from spinescan.metadata.types import MAX_CANDIDATES, CatalogRecord, as_text

_COVERS_BASE_URL = "https://covers.openlibrary.org/b/id"
_MAX_SUBJECTS = 5


def build_cover_url(cover_id: int | str, size: str = "M") -> str:
    """Build an Open Library cover image URL from a cover id.

    Args:
        cover_id: The `cover_i` value of a search doc.
        size: Image size: "S" (small), "M" (medium), or "L" (large).
    """
    return f"{_COVERS_BASE_URL}/{cover_id}-{size}.jpg"


def _list(value: Any) -> list[Any]:
    return [v for v in value if v is not None] if isinstance(value, list) else []


def _first(value: Any) -> str:
    values = _list(value)
    return as_text(values[0]) if values else ""


def parse_search_doc(doc: dict[str, Any]) -> CatalogRecord:
    """Parse one search doc.

    OL lists every edition's ISBN in one `isbn` array without marking
    which are ISBN-13, so the first entry is taken as the print ISBN and
    the first `978`-prefixed one as the digital ISBN.
    """
    isbns = [as_text(i) for i in _list(doc.get("isbn"))]
    cover_id = doc.get("cover_i")
    subjects = _list(doc.get("subject"))

    return CatalogRecord(
        title=as_text(doc.get("title")),
        author=_first(doc.get("author_name")),
        isbn=isbns[0] if isbns else "",
        isbn_digital=next((i for i in isbns if i.startswith("978")), ""),
        cover=build_cover_url(cover_id) if cover_id else "",
        publisher=_first(doc.get("publisher")),
        year=_first(doc.get("publish_year")),
        language=_first(doc.get("language")),
        subjects=", ".join(as_text(s) for s in subjects[:_MAX_SUBJECTS]),
    )


def parse_search_results(data: dict[str, Any]) -> list[CatalogRecord]:
    """Parse an Open Library search response into at most five records."""
    docs = data.get("docs") or []
    return [parse_search_doc(doc) for doc in docs[:MAX_CANDIDATES]]
