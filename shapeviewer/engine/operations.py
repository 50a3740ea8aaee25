"""Pure shape operations used by modifiers.

Every function takes descriptors and returns new ones; nothing is mutated.
Operations that can leave nothing behind (cutting away every quadrant) return
None for that piece.
"""

from __future__ import annotations

from shapeviewer.models.shape import MAX_LAYERS, QUADRANT_COUNT, Layer, ShapeDescriptor

# Quadrant indices: 0 = TR, 1 = BR, 2 = BL, 3 = TL
_EAST = (0, 1)
_WEST = (2, 3)


def rotate(shape: ShapeDescriptor, steps: int) -> ShapeDescriptor:
    """Rotate by ``steps`` quarter turns clockwise (negative = counter-clockwise)."""
    steps %= QUADRANT_COUNT
    if steps == 0:
        return shape
    layers = tuple(layer[-steps:] + layer[:-steps] for layer in shape.layers)
    return ShapeDescriptor(layers=layers)


def _keep(shape: ShapeDescriptor, indices: tuple[int, ...]) -> ShapeDescriptor | None:
    """Keep only the quadrants at ``indices``; drop layers left empty."""
    layers: list[Layer] = []
    for layer in shape.layers:
        kept = tuple(q if i in indices else None for i, q in enumerate(layer))
        if any(q is not None for q in kept):
            layers.append(kept)
    if not layers:
        return None
    return ShapeDescriptor(layers=tuple(layers))


def cut(shape: ShapeDescriptor) -> list[ShapeDescriptor]:
    """West half then east half. Empty halves are dropped."""
    halves = (_keep(shape, _WEST), _keep(shape, _EAST))
    return [h for h in halves if h is not None]


def quarter(shape: ShapeDescriptor) -> list[ShapeDescriptor]:
    """One piece per quadrant in TR, BR, BL, TL order. Empty pieces are dropped."""
    pieces = (_keep(shape, (i,)) for i in range(QUADRANT_COUNT))
    return [p for p in pieces if p is not None]


def split_layers(shape: ShapeDescriptor) -> list[ShapeDescriptor]:
    """Bottom-up list of single-layer shapes."""
    return [ShapeDescriptor(layers=(layer,)) for layer in shape.layers]


def paint(shape: ShapeDescriptor, color: str) -> ShapeDescriptor:
    layers = tuple(
        tuple(None if q is None else q.painted(color) for q in layer)
        for layer in shape.layers
    )
    return ShapeDescriptor(layers=layers)


def stack(bottom: ShapeDescriptor, top: ShapeDescriptor) -> ShapeDescriptor:
    """Place ``top``'s layers above ``bottom``'s. Layers past the limit are dropped."""
    layers = (bottom.layers + top.layers)[:MAX_LAYERS]
    return ShapeDescriptor(layers=layers)
