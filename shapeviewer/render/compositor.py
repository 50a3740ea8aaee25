"""Grid compositor — lays tiles out row-major into one PNG.

Layout is a pure function of (tile_count, tile_size): at most 8 columns,
as many rows as needed, trailing cells of the last row left transparent.
"""

from __future__ import annotations

import io
import logging
import math
import time
from collections.abc import Sequence
from typing import Callable

from PIL import Image

from shapeviewer.models.shape import CanvasLayout, ShapeDescriptor

logger = logging.getLogger(__name__)

MAX_COLUMNS = 8
DEFAULT_TILE_SIZE = 56

TileRenderer = Callable[[ShapeDescriptor, int], Image.Image]


def compute_layout(
    tile_count: int,
    tile_size: int = DEFAULT_TILE_SIZE,
    max_columns: int = MAX_COLUMNS,
) -> CanvasLayout:
    """Column/row geometry for ``tile_count`` tiles.

    Raises:
        ValueError: ``tile_count`` < 1. Callers must not composite an empty list.
    """
    if tile_count < 1:
        raise ValueError("Cannot lay out zero tiles")
    column_count = min(tile_count, max_columns)
    row_count = math.ceil(tile_count / column_count)
    return CanvasLayout(
        tile_count=tile_count,
        column_count=column_count,
        row_count=row_count,
        tile_size=tile_size,
    )


def composite(
    tiles: Sequence[Image.Image],
    tile_size: int = DEFAULT_TILE_SIZE,
    max_columns: int = MAX_COLUMNS,
) -> Image.Image:
    """Paste ``tiles`` into a transparent grid, in order."""
    layout = compute_layout(len(tiles), tile_size, max_columns)
    canvas = Image.new("RGBA", (layout.image_width, layout.image_height), (0, 0, 0, 0))

    for index, tile in enumerate(tiles):
        tile = tile.convert("RGBA")
        if tile.size != (tile_size, tile_size):
            logger.warning(
                "Tile %d is %dx%d, expected %dx%d; resizing",
                index,
                tile.width,
                tile.height,
                tile_size,
                tile_size,
            )
            tile = tile.resize((tile_size, tile_size))
        canvas.alpha_composite(tile, dest=layout.position(index))

    return canvas


def encode_png(image: Image.Image) -> bytes:
    """Lossless PNG bytes for ``image``."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def render_shapes(
    shapes: Sequence[ShapeDescriptor],
    renderer: TileRenderer,
    tile_size: int = DEFAULT_TILE_SIZE,
    max_columns: int = MAX_COLUMNS,
) -> bytes:
    """Render every shape with ``renderer`` and return the composite PNG."""
    start = time.perf_counter()
    tiles = [renderer(shape, tile_size) for shape in shapes]
    image = composite(tiles, tile_size, max_columns)
    data = encode_png(image)
    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "Rendered %d shape(s) into %dx%d PNG (%d bytes) in %.0fms",
        len(shapes),
        image.width,
        image.height,
        len(data),
        elapsed,
    )
    return data
