# ABOUTME: Parsing package turning OCR text into search candidates.
# ABOUTME: Exports the segmenter entry points and the ParsedCandidate type.

from spinescan.parsing.segmenter import (
    MAX_CANDIDATES,
    ParsedCandidate,
    is_likely_author,
    parse_ocr_text,
    segment_groups,
)

__all__ = [
    "MAX_CANDIDATES",
    "ParsedCandidate",
    "is_likely_author",
    "parse_ocr_text",
    "segment_groups",
]
