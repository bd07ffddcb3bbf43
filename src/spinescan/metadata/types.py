# ABOUTME: Normalized catalog data structures shared by every lookup source.
# ABOUTME: CatalogRecord is one bibliographic match; LookupResult is a source's answer.

from dataclasses import asdict, dataclass, field, fields
from typing import Any

MAX_CANDIDATES = 5


def as_text(value: Any) -> str:
    """Render a parsed JSON value as a record field: None is "", anything else str()."""
    return "" if value is None else str(value)


@dataclass
class CatalogRecord:
    """Bibliographic record normalized from any catalog source.

    Every field is a string and missing values are empty strings, never
    None, so callers can format records without checking each field.
    `isbn` is the print identifier; `isbn_digital` is the ISBN-13 when the
    source tells the two apart.
    """

    title: str = ""
    author: str = ""
    isbn: str = ""
    isbn_digital: str = ""
    cover: str = ""
    publisher: str = ""
    year: str = ""
    language: str = ""
    description: str = ""
    subjects: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CatalogRecord":
        """Build a record from a dict, ignoring unknown keys and coercing None to ""."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: as_text(v) for k, v in data.items() if k in known})


@dataclass
class LookupResult:
    """A source's answer to one query: the top match plus up to five candidates."""

    best: CatalogRecord | None
    candidates: list[CatalogRecord] = field(default_factory=list)

    @property
    def has_title(self) -> bool:
        return self.best is not None and bool(self.best.title)

    @classmethod
    def from_records(cls, records: list[CatalogRecord]) -> "LookupResult | None":
        """Wrap source-ranked records; the first is taken as best. None if empty."""
        if not records:
            return None
        candidates = records[:MAX_CANDIDATES]
        return cls(best=candidates[0], candidates=candidates)

    def to_dict(self) -> dict[str, Any]:
        return {
            "best": self.best.to_dict() if self.best is not None else None,
            "candidates": [c.to_dict() for c in self.candidates],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LookupResult":
        best = data.get("best")
        return cls(
            best=CatalogRecord.from_dict(best) if best else None,
            candidates=[CatalogRecord.from_dict(c) for c in data.get("candidates", [])],
        )
