"""Instruction extractor — finds ``{key+mod+mod}`` tokens in free-form text.

Scanning is a plain split on the start marker: every fragment after a ``{`` is
searched for its own first ``}``. Fragments without one are ignored, so
``{a{b}`` yields only ``b``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from typing import Callable, TypeVar

from shapeviewer.engine.builder import build_shapes
from shapeviewer.errors import ModifierLimitExceeded
from shapeviewer.models.shape import Instruction, RawToken, ShapeDescriptor

logger = logging.getLogger(__name__)

START_MARKER = "{"
END_MARKER = "}"
MODIFIER_DELIMITER = "+"

MAX_MODIFIERS = 10
MAX_SHAPES = 64

ShapeBuilder = Callable[[str, Sequence[str]], Sequence[ShapeDescriptor]]

T = TypeVar("T")


def iter_tokens(message: str) -> Iterator[RawToken]:
    """Yield every terminated token in left-to-right order."""
    fragments = message.split(START_MARKER)[1:]
    for fragment in fragments:
        end = fragment.find(END_MARKER)
        if end == -1:
            continue
        yield RawToken(body=fragment[:end], start=START_MARKER, end=END_MARKER)


def parse_instruction(token: RawToken, max_modifiers: int = MAX_MODIFIERS) -> Instruction:
    """Split a token body into key and modifiers.

    Raises:
        ModifierLimitExceeded: more than ``max_modifiers`` flags after the key.
    """
    key, *flags = token.body.split(MODIFIER_DELIMITER)
    if len(flags) > max_modifiers:
        raise ModifierLimitExceeded(len(flags), max_modifiers)

    return Instruction(key=key, modifiers=tuple(flags))


def extract_shapes(
    message: str,
    builder: ShapeBuilder = build_shapes,
    max_modifiers: int = MAX_MODIFIERS,
) -> list[ShapeDescriptor]:
    """Extract every shape described in ``message``, in order.

    The result is not capped; see cap_shapes(). Any error (modifier limit or
    builder failure) aborts the whole message.
    """
    shapes: list[ShapeDescriptor] = []
    if START_MARKER not in message:
        return shapes

    for token in iter_tokens(message):
        instruction = parse_instruction(token, max_modifiers)
        shapes.extend(builder(instruction.key, list(instruction.modifiers)))

    logger.debug("Extracted %d shape(s) from message", len(shapes))
    return shapes


def cap_shapes(shapes: Sequence[T], limit: int = MAX_SHAPES) -> list[T]:
    """Keep at most ``limit`` items from the front."""
    if len(shapes) > limit:
        logger.info("Truncating %d shapes to %d", len(shapes), limit)
    return list(shapes[:limit])
