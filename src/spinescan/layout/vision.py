# ABOUTME: Adapters from OCR engine output (plain text or structured JSON) to spine groups.
# ABOUTME: Rebuilds block text from Vision-style word/symbol trees and groups blocks by position.

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from spinescan.layout.grouping import block_from_vertices, group_blocks, join_groups
from spinescan.layout.types import SpineGroup, TextBlock

logger = logging.getLogger(__name__)

_BREAK_CHARS: dict[str, str] = {
    "SPACE": " ",
    "SURE_SPACE": " ",
    "EOL_SURE_SPACE": "\n",
    "LINE_BREAK": "\n",
    "HYPHEN": "-\n",
}


class OcrInputError(Exception):
    """Raised when an OCR input file cannot be read or understood."""


@dataclass
class OcrPage:
    """OCR output for one photo.

    When the OCR engine reported block positions, `groups` holds the spines
    in shelf order and `text` is their marker-joined encoding. Otherwise
    `groups` is empty and `text` is whatever plain text the engine gave.
    """

    text: str
    groups: list[SpineGroup] = field(default_factory=list)

    @property
    def is_structured(self) -> bool:
        return bool(self.groups)


def break_char(break_type: str | None) -> str:
    """Whitespace for a detectedBreak type; unknown types become a space."""
    return _BREAK_CHARS.get(break_type or "", " ")


def _symbol_text(symbol: dict[str, Any]) -> str:
    text = symbol.get("text", "")
    detected = (symbol.get("property") or {}).get("detectedBreak")
    if detected:
        text += break_char(detected.get("type"))
    return text


def block_text(block: dict[str, Any]) -> str:
    """Reconstruct a block's text from paragraphs -> words -> symbols."""
    parts: list[str] = []
    for paragraph in block.get("paragraphs") or []:
        for word in paragraph.get("words") or []:
            parts.extend(_symbol_text(s) for s in word.get("symbols") or [])
    return "".join(parts).strip()


def blocks_from_annotation(annotation: dict[str, Any]) -> list[TextBlock]:
    """Extract positioned TEXT blocks from a fullTextAnnotation."""
    blocks: list[TextBlock] = []
    for page in annotation.get("pages") or []:
        for block in page.get("blocks") or []:
            if block.get("blockType") != "TEXT":
                continue
            vertices = (block.get("boundingBox") or {}).get("vertices") or []
            if len(vertices) < 4:
                continue
            text = block_text(block)
            if text:
                blocks.append(block_from_vertices(text, vertices))
    return blocks


def blocks_from_simple_layout(items: list[dict[str, Any]]) -> list[TextBlock]:
    """Extract blocks from a flat `[{text, boundingBoxVertices}]` list."""
    blocks: list[TextBlock] = []
    for item in items:
        text = (item.get("text") or "").strip()
        vertices = item.get("boundingBoxVertices") or []
        if text and len(vertices) >= 4:
            blocks.append(block_from_vertices(text, vertices))
    return blocks


def _page_from_blocks(blocks: list[TextBlock]) -> OcrPage:
    groups = group_blocks(blocks)
    return OcrPage(text=join_groups(groups), groups=groups)


def parse_vision_response(data: dict[str, Any] | list[Any]) -> OcrPage:
    """Turn a structured OCR response into an OcrPage.

    Accepts a full annotate response (`{"responses": [...]}`), a single
    response object, or a flat list of `{text, boundingBoxVertices}` items.
    Positioned blocks are grouped into spines; without them the plain
    `fullTextAnnotation.text` is used, then `textAnnotations[0]`.
    """
    if isinstance(data, list):
        blocks = blocks_from_simple_layout(data)
        return _page_from_blocks(blocks) if blocks else OcrPage(text="")

    result = data
    if "responses" in data:
        responses = data.get("responses") or []
        result = responses[0] if responses else {}

    annotation = result.get("fullTextAnnotation") or {}
    blocks = blocks_from_annotation(annotation)
    if blocks:
        return _page_from_blocks(blocks)

    if annotation.get("text"):
        return OcrPage(text=annotation["text"])

    text_annotations = result.get("textAnnotations") or []
    if text_annotations:
        return OcrPage(text=text_annotations[0].get("description", ""))
    return OcrPage(text="")


def load_ocr_file(path: Path) -> OcrPage:
    """Load one OCR dump: `.json` files are structured responses, others plain text.

    Raises:
        OcrInputError: If the file cannot be read or its JSON is malformed.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise OcrInputError(f"Cannot read {path}: {exc}") from exc

    if path.suffix.lower() != ".json":
        return OcrPage(text=raw)

    try:
        data = json.loads(raw)
        page = parse_vision_response(data)
    except (ValueError, TypeError, AttributeError) as exc:
        raise OcrInputError(f"Malformed OCR response in {path}: {exc}") from exc

    logger.debug("Loaded %s: %d spine group(s)", path, len(page.groups))
    return page
