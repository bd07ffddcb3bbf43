# ABOUTME: Horizontal-overlap grouping of OCR text blocks into book spines.
# ABOUTME: Produces SpineGroups left to right, plus the legacy "---" text encoding.

from collections.abc import Iterable, Sequence
from typing import Any

from spinescan.layout.types import SpineGroup, TextBlock

# Separator between spines in plain-text OCR output.
SPINE_MARKER = "\n---\n"

# Fraction of a block's own width that must fall inside the group span.
_MIN_OVERLAP_RATIO = 0.3


def block_from_vertices(text: str, vertices: Sequence[dict[str, Any]]) -> TextBlock:
    """Build a TextBlock from a 4-vertex bounding polygon.

    Vertices follow the OCR provider's order: top-left, top-right,
    bottom-right, bottom-left. Missing coordinates count as 0, which is
    how the provider omits zero values.

    Raises:
        ValueError: If fewer than four vertices are given.
    """
    if len(vertices) < 4:
        raise ValueError(f"Bounding box needs 4 vertices, got {len(vertices)}")
    v0, v1, v2, v3 = (vertices[i] for i in range(4))
    x0, x1, x2, x3 = (float(v.get("x", 0)) for v in (v0, v1, v2, v3))
    return TextBlock(
        text=text,
        x_center=(x0 + x1) / 2,
        x_min=min(x0, x3),
        x_max=max(x1, x2),
    )


def _overlap(group_min: float, group_max: float, block: TextBlock) -> float:
    return max(0.0, min(group_max, block.x_max) - max(group_min, block.x_min))


def group_blocks(blocks: Iterable[TextBlock]) -> list[SpineGroup]:
    """Group text blocks into spines by horizontal overlap.

    Blocks are sorted by x_center. Each block is compared against the
    running span of the whole current group, not just the previous block,
    so a narrow imprint block still joins a spine whose title block it
    overlaps. A block joins when more than 30% of its own width lies inside
    the group span; a block with no width never joins.
    """
    ordered = sorted(blocks, key=lambda b: b.x_center)
    if not ordered:
        return []

    groups: list[SpineGroup] = []
    current = SpineGroup(blocks=[ordered[0]])
    group_min, group_max = ordered[0].x_min, ordered[0].x_max

    for block in ordered[1:]:
        width = block.width
        overlap = _overlap(group_min, group_max, block)
        if width > 0 and overlap / width > _MIN_OVERLAP_RATIO:
            current.blocks.append(block)
            group_min = min(group_min, block.x_min)
            group_max = max(group_max, block.x_max)
        else:
            groups.append(current)
            current = SpineGroup(blocks=[block])
            group_min, group_max = block.x_min, block.x_max

    groups.append(current)
    return groups


def join_groups(groups: Iterable[SpineGroup]) -> str:
    """Encode groups as plain text: lines per spine, spines split by SPINE_MARKER."""
    return SPINE_MARKER.join(group.text for group in groups)
