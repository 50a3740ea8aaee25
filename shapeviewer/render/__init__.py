"""Tile rendering and grid compositing."""

from shapeviewer.render.compositor import compute_layout, composite, encode_png, render_shapes
from shapeviewer.render.tile import descriptor_to_svg, render_tile

__all__ = [
    "compute_layout",
    "composite",
    "encode_png",
    "render_shapes",
    "descriptor_to_svg",
    "render_tile",
]
