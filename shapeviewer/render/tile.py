"""Single-tile renderer — ShapeDescriptor -> SVG -> RGBA Pillow image.

Each shape is drawn into a fixed 100×100 viewBox and rasterized at the
requested tile size with CairoSVG. String formatting only, no SVG library.
"""

from __future__ import annotations

import io
import logging

import cairosvg
from PIL import Image

from shapeviewer.models.shape import Quadrant, ShapeDescriptor

logger = logging.getLogger(__name__)

_VIEWBOX = 100.0
_CENTER = _VIEWBOX / 2

# Background disc and outer shape radius, in viewBox units
_BACKGROUND_RADIUS = 48.0
_SHAPE_RADIUS = 40.0

# Each layer above the bottom one shrinks by 22% of the full radius
_LAYER_SHRINK = 0.22

# Star / windmill inner point: 60% of the quadrant radius
_INNER_RATIO = 0.6

_BACKGROUND = "#2c2f38"
_STROKE = "#555555"
_STROKE_WIDTH = 1.5

PALETTE: dict[str, str] = {
    "r": "#ff666a",
    "g": "#78ff66",
    "b": "#66a7ff",
    "y": "#fcf52a",
    "p": "#dd66ff",
    "c": "#00fcff",
    "u": "#aaaaaa",
    "w": "#ffffff",
}


def _quadrant_path(shape: str, r: float) -> str:
    """Path for one quadrant in the top-right quarter, origin at the shape center."""
    inner = r * _INNER_RATIO
    if shape == "C":
        return f"M 0,0 L 0,{-r:.2f} A {r:.2f},{r:.2f} 0 0 1 {r:.2f},0 Z"
    if shape == "R":
        return f"M 0,0 L 0,{-r:.2f} L {r:.2f},{-r:.2f} L {r:.2f},0 Z"
    if shape == "S":
        return f"M 0,0 L 0,{-inner:.2f} L {r:.2f},{-r:.2f} L {inner:.2f},0 Z"
    if shape == "W":
        return f"M 0,0 L 0,{-inner:.2f} L {r:.2f},{-r:.2f} L {r:.2f},0 Z"
    raise ValueError(f"Unknown shape type: {shape!r}")


def _render_quadrant(quadrant: Quadrant, index: int, r: float) -> str:
    fill = PALETTE.get(quadrant.color, PALETTE["u"])
    return (
        f'<path d="{_quadrant_path(quadrant.shape, r)}" '
        f'transform="translate({_CENTER:.1f},{_CENTER:.1f}) rotate({90 * index})" '
        f'fill="{fill}" stroke="{_STROKE}" stroke-width="{_STROKE_WIDTH}" '
        'stroke-linejoin="round"/>'
    )


def descriptor_to_svg(descriptor: ShapeDescriptor) -> str:
    """Standalone SVG document for one shape, bottom layer drawn first."""
    parts = [
        f'<circle cx="{_CENTER:.1f}" cy="{_CENTER:.1f}" r="{_BACKGROUND_RADIUS:.1f}" '
        f'fill="{_BACKGROUND}"/>'
    ]
    for n, layer in enumerate(descriptor.layers):
        r = _SHAPE_RADIUS * (1 - _LAYER_SHRINK * n)
        for index, quadrant in enumerate(layer):
            if quadrant is not None:
                parts.append(_render_quadrant(quadrant, index, r))

    content = "\n".join(parts)
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {_VIEWBOX:.0f} {_VIEWBOX:.0f}"'
        f' width="{_VIEWBOX:.0f}" height="{_VIEWBOX:.0f}">'
        f"\n{content}\n</svg>"
    )


def rasterize_svg(svg: str, size: int) -> Image.Image:
    """Rasterize SVG to a size×size RGBA image using CairoSVG."""
    png_data = cairosvg.svg2png(
        bytestring=svg.encode("utf-8"),
        output_width=size,
        output_height=size,
    )
    return Image.open(io.BytesIO(png_data)).convert("RGBA")


def render_tile(descriptor: ShapeDescriptor, tile_size: int) -> Image.Image:
    """Render one descriptor into a tile_size×tile_size tile."""
    return rasterize_svg(descriptor_to_svg(descriptor), tile_size)
