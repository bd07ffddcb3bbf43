# ABOUTME: Positional OCR data structures used by the spine grouper.
# ABOUTME: TextBlock is one recognized fragment; SpineGroup is the fragments of one spine.

from dataclasses import dataclass, field


@dataclass
class TextBlock:
    """One OCR-recognized text fragment with its horizontal extent.

    Only the x-axis matters for grouping: spines stand side by side on a
    shelf, so fragments of the same spine share a column of the photo.
    """

    text: str
    x_center: float
    x_min: float
    x_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min


@dataclass
class SpineGroup:
    """Ordered cluster of TextBlocks judged to belong to one book spine."""

    blocks: list[TextBlock] = field(default_factory=list)

    @property
    def x_min(self) -> float:
        return min(block.x_min for block in self.blocks)

    @property
    def x_max(self) -> float:
        return max(block.x_max for block in self.blocks)

    @property
    def lines(self) -> list[str]:
        """Member texts split into individual lines, in block order."""
        return [line for block in self.blocks for line in block.text.split("\n")]

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.blocks)
