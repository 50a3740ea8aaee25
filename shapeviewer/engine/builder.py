"""Default shape builder — short key + modifiers -> list of ShapeDescriptor.

Modifiers are standalone functions registered via decorator:

    @modifier("cut", description="West half, then east half")
    def _cut(shapes: list[ShapeDescriptor], arg: str | None) -> list[ShapeDescriptor]:
        return [half for s in shapes for half in operations.cut(s)]

A modifier receives the whole working list and returns a new one, so one
token can expand into several shapes (or none at all).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Callable, Optional

from shapeviewer.engine import operations
from shapeviewer.engine.shortkey import parse_short_key
from shapeviewer.errors import UnknownModifier
from shapeviewer.models.shape import COLORS, ShapeDescriptor

logger = logging.getLogger(__name__)

ModifierFn = Callable[[list[ShapeDescriptor], Optional[str]], list[ShapeDescriptor]]

ARGUMENT_SEPARATOR = ":"

# Repeat modifier: x1 .. x8
_REPEAT_RE = re.compile(r"x(\d+)")
MAX_REPEAT = 8

# Working-list bound per token, same as the per-message shape cap
MAX_WORKING_SHAPES = 64


@dataclass
class ModifierSpec:
    name: str
    fn: ModifierFn
    aliases: set[str] = field(default_factory=set)
    takes_argument: bool = False
    description: str = ""


class ModifierRegistry:
    """Name/alias -> ModifierSpec lookup."""

    def __init__(self) -> None:
        self._modifiers: dict[str, ModifierSpec] = {}

    def register(self, spec: ModifierSpec) -> None:
        names = {spec.name, *spec.aliases}
        taken = sorted(names & self._modifiers.keys())
        if taken:
            raise ValueError(f"Duplicate modifier name: {', '.join(taken)}")
        for name in names:
            self._modifiers[name] = spec
        logger.debug("Registered modifier %s", spec.name)

    def get(self, name: str) -> ModifierSpec | None:
        return self._modifiers.get(name)

    def all(self) -> list[ModifierSpec]:
        unique = {id(s): s for s in self._modifiers.values()}
        return sorted(unique.values(), key=lambda s: s.name)

    @property
    def count(self) -> int:
        return len(self.all())


# Module-level singleton
_registry = ModifierRegistry()


def get_registry() -> ModifierRegistry:
    return _registry


def modifier(
    name: str,
    *,
    aliases: set[str] | None = None,
    takes_argument: bool = False,
    description: str = "",
):
    """Decorator to register a modifier function."""

    def decorator(fn: ModifierFn) -> ModifierFn:
        _registry.register(
            ModifierSpec(
                name=name,
                fn=fn,
                aliases=aliases or set(),
                takes_argument=takes_argument,
                description=description,
            )
        )
        return fn

    return decorator


@modifier("cw", aliases={"rr"}, description="Rotate 90° clockwise")
def _rotate_cw(shapes, arg):
    return [operations.rotate(s, 1) for s in shapes]


@modifier("ccw", aliases={"rl"}, description="Rotate 90° counter-clockwise")
def _rotate_ccw(shapes, arg):
    return [operations.rotate(s, -1) for s in shapes]


@modifier("180", aliases={"fl"}, description="Rotate 180°")
def _rotate_half(shapes, arg):
    return [operations.rotate(s, 2) for s in shapes]


@modifier("cut", description="West half, then east half")
def _cut(shapes, arg):
    return [half for s in shapes for half in operations.cut(s)]


@modifier("qcut", description="Split into single quadrants")
def _quarter(shapes, arg):
    return [piece for s in shapes for piece in operations.quarter(s)]


@modifier("layers", description="One shape per layer, bottom first")
def _layers(shapes, arg):
    return [layer for s in shapes for layer in operations.split_layers(s)]


@modifier("paint", takes_argument=True, description="Paint every quadrant, e.g. paint:r")
def _paint(shapes, arg):
    if arg not in COLORS:
        raise UnknownModifier(f"paint:{arg}", "unknown color")
    return [operations.paint(s, arg) for s in shapes]


@modifier("stack", takes_argument=True, description="Stack another short key on top")
def _stack(shapes, arg):
    top = parse_short_key(arg)
    return [operations.stack(s, top) for s in shapes]


def _repeat(shapes: list[ShapeDescriptor], count: int) -> list[ShapeDescriptor]:
    return list(shapes) * count


def apply_modifier(
    shapes: list[ShapeDescriptor],
    flag: str,
    registry: ModifierRegistry | None = None,
) -> list[ShapeDescriptor]:
    """Apply one modifier flag to the working list."""
    registry = registry or get_registry()

    repeat = _REPEAT_RE.fullmatch(flag)
    if repeat:
        count = int(repeat.group(1))
        if not 1 <= count <= MAX_REPEAT:
            raise UnknownModifier(flag, f"repeat count must be 1-{MAX_REPEAT}")
        return _repeat(shapes, count)

    name, sep, arg = flag.partition(ARGUMENT_SEPARATOR)
    spec = registry.get(name.lower())
    if spec is None:
        raise UnknownModifier(flag)
    if spec.takes_argument and not arg:
        raise UnknownModifier(flag, "missing argument")
    if not spec.takes_argument and sep:
        raise UnknownModifier(flag, "unexpected argument")
    return spec.fn(shapes, arg or None)


def build_shapes(
    key: str,
    modifiers: Sequence[str],
    max_shapes: int = MAX_WORKING_SHAPES,
) -> list[ShapeDescriptor]:
    """Build the shapes for one instruction.

    Modifier flags are stripped and empty ones skipped. The working list is
    truncated to ``max_shapes`` after every modifier, so chained expansions
    (``x8+x8+...``) stay bounded.

    Raises:
        ShapeBuildError: invalid key or modifier. Never caught here.
    """
    shapes = [parse_short_key(key)]
    for flag in modifiers:
        flag = flag.strip()
        if not flag:
            continue
        shapes = apply_modifier(shapes, flag)[:max_shapes]
    logger.debug("Built %d shape(s) from %r %s", len(shapes), key, list(modifiers))
    return shapes
