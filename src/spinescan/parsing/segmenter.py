# ABOUTME: Heuristic segmentation of spine OCR text into title/author candidates.
# ABOUTME: Structured mode works per spine group; fallback mode reads a flat line stream.

import re
from collections.abc import Iterable
from dataclasses import dataclass

from spinescan.layout.grouping import SPINE_MARKER
from spinescan.layout.types import SpineGroup

MAX_CANDIDATES = 20

# Lines this short or purely numeric are shelf labels, page numbers or OCR noise.
_MIN_LINE_LENGTH = 3
_NUMERIC_RE = re.compile(r"^\d+$")

_AUTHOR_PATTERNS = (
    re.compile(r"^[A-Z][a-z]+\s+[A-Z][a-z]+$"),  # "John Smith"
    re.compile(r"^[A-Z]\.\s*[A-Z][a-z]+$"),  # "J. Smith"
    re.compile(r"^[A-Z][a-z]+,\s*[A-Z]"),  # "Smith, John"
)

# Names carrying initials ("F. Scott Fitzgerald", "J. R. R. Tolkien") fall
# outside the author patterns but are never titles either.
_INITIALED_NAME_RE = re.compile(r"^(?:[A-Z][a-z]+\s+)?(?:[A-Z]\.\s+)+(?:[A-Z][a-z]+\s*){1,3}$")


@dataclass
class ParsedCandidate:
    """A tentative book entry extracted from spine text."""

    raw_text: str
    possible_title: str
    possible_author: str = ""


def is_likely_author(text: str) -> bool:
    """Whether a line looks like an author name.

    Matches exactly two capitalized words, an initial plus surname, or
    "Surname, Given". Longer names such as "F. Scott Fitzgerald" do not
    match.
    """
    line = text.strip()
    return any(pattern.match(line) for pattern in _AUTHOR_PATTERNS)


def _is_initialed_name(line: str) -> bool:
    return bool(_INITIALED_NAME_RE.match(line))


def _is_noise(line: str) -> bool:
    return len(line) < _MIN_LINE_LENGTH or bool(_NUMERIC_RE.match(line))


def _clean_lines(lines: Iterable[str]) -> list[str]:
    return [line.strip() for line in lines if line.strip()]


def _parse_segment(lines: list[str]) -> ParsedCandidate | None:
    """Pick title and author from the lines of one spine."""
    present = _clean_lines(lines)
    kept = [line for line in present if not _is_noise(line)]
    if not kept:
        return None

    title = ""
    author = ""
    for line in kept:
        if is_likely_author(line):
            if not author:
                author = line
        elif not _is_initialed_name(line) and len(line) > len(title):
            title = line

    if not title:
        title = present[0]

    # Noise stays out of the raw text unless it had to stand in as the title.
    words = kept if title in kept else [title, *kept]
    return ParsedCandidate(
        raw_text=" ".join(words),
        possible_title=title,
        possible_author=author,
    )


def segment_groups(groups: Iterable[SpineGroup]) -> list[ParsedCandidate]:
    """Structured mode: one candidate per spine group, in shelf order."""
    return _segment_sections(group.lines for group in groups)


def _segment_sections(sections: Iterable[list[str]]) -> list[ParsedCandidate]:
    candidates: list[ParsedCandidate] = []
    for lines in sections:
        candidate = _parse_segment(lines)
        if candidate is not None:
            candidates.append(candidate)
        if len(candidates) >= MAX_CANDIDATES:
            break
    return candidates


def _segment_stream(text: str) -> list[ParsedCandidate]:
    """Fallback mode: title line followed by an optional author line."""
    candidates: list[ParsedCandidate] = []
    current: ParsedCandidate | None = None

    for line in _clean_lines(text.split("\n")):
        if _is_noise(line):
            continue
        if is_likely_author(line):
            # Author lines before any title have nothing to attach to.
            if current is not None:
                current.possible_author = line
                current.raw_text = f"{current.raw_text} {line}"
            continue
        if current is not None:
            candidates.append(current)
        current = ParsedCandidate(raw_text=line, possible_title=line)

    if current is not None:
        candidates.append(current)

    return candidates[:MAX_CANDIDATES]


def parse_ocr_text(text: str) -> list[ParsedCandidate]:
    """Segment plain OCR text into candidates.

    Text containing SPINE_MARKER is split on it and each section is one
    spine (structured mode). Anything else is read as a flat stream of
    title and author lines.
    """
    if not text or not text.strip():
        return []
    text = text.replace("\r\n", "\n")
    if SPINE_MARKER in text:
        return _segment_sections(section.split("\n") for section in text.split(SPINE_MARKER))
    return _segment_stream(text)


def rejoin_candidates(candidates: Iterable[ParsedCandidate]) -> str:
    """Marker-join each candidate's title and author back into plain text."""
    sections = []
    for candidate in candidates:
        lines = [candidate.possible_title]
        if candidate.possible_author:
            lines.append(candidate.possible_author)
        sections.append("\n".join(lines))
    return SPINE_MARKER.join(sections)
