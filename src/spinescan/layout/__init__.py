# ABOUTME: Layout package for turning positional OCR output into per-spine text groups.
# ABOUTME: Exports the TextBlock/SpineGroup types and the horizontal grouping algorithm.

from spinescan.layout.grouping import SPINE_MARKER, group_blocks, join_groups
from spinescan.layout.types import SpineGroup, TextBlock

__all__ = [
    "SPINE_MARKER",
    "SpineGroup",
    "TextBlock",
    "group_blocks",
    "join_groups",
]
