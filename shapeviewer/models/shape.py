"""Shape value objects — tokens, instructions and layered shape descriptors.

Quadrant order inside a layer follows the short key: top-right, bottom-right,
bottom-left, top-left (clockwise from the top-right corner). Layers are stored
bottom layer first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

# Shape letter -> human name
SHAPE_TYPES: dict[str, str] = {
    "C": "circle",
    "R": "rectangle",
    "S": "star",
    "W": "windmill",
}

# Color letter -> human name
COLORS: dict[str, str] = {
    "r": "red",
    "g": "green",
    "b": "blue",
    "y": "yellow",
    "p": "purple",
    "c": "cyan",
    "u": "uncolored",
    "w": "white",
}

QUADRANT_COUNT = 4
MAX_LAYERS = 4


@dataclass(frozen=True)
class RawToken:
    """Text enclosed by a start/end marker pair in a chat message."""

    body: str
    start: str = "{"
    end: str = "}"


@dataclass(frozen=True)
class Instruction:
    """A token split into its shape key and ordered modifier flags."""

    key: str
    modifiers: tuple[str, ...] = ()


@dataclass(frozen=True)
class Quadrant:
    shape: str
    color: str = "u"

    def painted(self, color: str) -> Quadrant:
        return Quadrant(self.shape, color)


Layer = tuple[Optional[Quadrant], ...]


@dataclass(frozen=True)
class ShapeDescriptor:
    """Renderer-ready description of one shape: 1-4 layers of 4 quadrants."""

    layers: tuple[Layer, ...] = field(default_factory=tuple)

    @property
    def layer_count(self) -> int:
        return len(self.layers)


@dataclass(frozen=True)
class CanvasLayout:
    """Grid geometry for compositing ``tile_count`` tiles."""

    tile_count: int
    column_count: int
    row_count: int
    tile_size: int

    @property
    def image_width(self) -> int:
        return self.tile_size * self.column_count

    @property
    def image_height(self) -> int:
        return self.tile_size * self.row_count

    def position(self, index: int) -> tuple[int, int]:
        """Pixel offset (x, y) of the tile at ``index``, row-major."""
        column = index % self.column_count
        row = index // self.column_count
        return (column * self.tile_size, row * self.tile_size)
