"""Short key codec — ``CuRuSuWu:--Cr----`` <-> ShapeDescriptor.

A short key is 1-4 layers separated by ``:``, bottom layer first. Each layer
holds four (shape, color) pairs in quadrant order TR, BR, BL, TL; ``--`` marks
an empty quadrant. A two-character layer is shorthand for the pair repeated
four times.
"""

from __future__ import annotations

import re

from shapeviewer.errors import InvalidShapeKey
from shapeviewer.models.shape import (
    COLORS,
    MAX_LAYERS,
    QUADRANT_COUNT,
    SHAPE_TYPES,
    Layer,
    Quadrant,
    ShapeDescriptor,
)

LAYER_SEPARATOR = ":"
EMPTY_QUADRANT = "--"

# Named shapes usable in place of a short key (matched case-insensitively)
ALIASES: dict[str, str] = {
    "circle": "CuCuCuCu",
    "square": "RuRuRuRu",
    "star": "SuSuSuSu",
    "windmill": "WuWuWuWu",
    "logo": "RuCw--Cw:----Ru--",
    "rocket": "CbCuCbCu:Sr------:--CrSrCr:CwCwCwCw",
}

_PAIR_RE = re.compile(r"[A-Z][a-z]|--")


def resolve_alias(key: str) -> str:
    return ALIASES.get(key.lower(), key)


def parse_short_key(key: str) -> ShapeDescriptor:
    """Parse a short key (or alias) into a ShapeDescriptor.

    Raises:
        InvalidShapeKey: on any malformed layer, unknown letter or too many layers.
    """
    code = resolve_alias(key.strip())
    if not code:
        raise InvalidShapeKey(key, "empty key")

    raw_layers = code.split(LAYER_SEPARATOR)
    if len(raw_layers) > MAX_LAYERS:
        raise InvalidShapeKey(key, f"more than {MAX_LAYERS} layers")

    layers = tuple(_parse_layer(key, raw) for raw in raw_layers)
    return ShapeDescriptor(layers=layers)


def _parse_layer(key: str, raw: str) -> Layer:
    if len(raw) == 2:
        raw = raw * QUADRANT_COUNT
    if len(raw) != 2 * QUADRANT_COUNT:
        raise InvalidShapeKey(key, f"layer {raw!r} must have {2 * QUADRANT_COUNT} characters")

    quadrants: list[Quadrant | None] = []
    for i in range(0, len(raw), 2):
        pair = raw[i : i + 2]
        if pair == EMPTY_QUADRANT:
            quadrants.append(None)
            continue
        if not _PAIR_RE.fullmatch(pair):
            raise InvalidShapeKey(key, f"malformed quadrant {pair!r}")
        shape, color = pair[0], pair[1]
        if shape not in SHAPE_TYPES:
            raise InvalidShapeKey(key, f"unknown shape {shape!r}")
        if color not in COLORS:
            raise InvalidShapeKey(key, f"unknown color {color!r}")
        quadrants.append(Quadrant(shape, color))

    if all(q is None for q in quadrants):
        raise InvalidShapeKey(key, "layer has no quadrants")
    return tuple(quadrants)


def to_short_key(descriptor: ShapeDescriptor) -> str:
    """Canonical short key for a descriptor (no shorthand, no aliases)."""
    return LAYER_SEPARATOR.join(
        "".join(EMPTY_QUADRANT if q is None else q.shape + q.color for q in layer)
        for layer in descriptor.layers
    )
