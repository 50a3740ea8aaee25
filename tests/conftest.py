"""Shared test fixtures."""

from __future__ import annotations

import pytest
from PIL import Image

from shapeviewer.models.shape import Quadrant, ShapeDescriptor

# Sample chat messages

PLAIN_MESSAGE = "no shapes in here, just chatting"

SINGLE_SHAPE_MESSAGE = "look at this {CuRuSuWu}"

MULTI_SHAPE_MESSAGE = "first {CuCuCuCu} then {RrRrRrRr+cw} and {logo}"

UNTERMINATED_MESSAGE = "a {bad b {valid}"

TEN_SHAPES_MESSAGE = " ".join(["{Cu}"] * 10)


def stub_builder(key: str, modifiers) -> list[str]:
    """Builder that returns its input as a string per token."""
    return [key + "".join(f"+{m}" for m in modifiers)]


class RecordingBuilder:
    """Builder stub recording every call."""

    def __init__(self, expand: int = 1) -> None:
        self.calls: list[tuple[str, list[str]]] = []
        self.expand = expand

    def __call__(self, key: str, modifiers) -> list[str]:
        self.calls.append((key, list(modifiers)))
        return [f"{key}#{i}" for i in range(self.expand)]


def solid_tile(color: tuple[int, int, int, int], size: int) -> Image.Image:
    return Image.new("RGBA", (size, size), color)


def index_renderer(descriptor, tile_size: int) -> Image.Image:
    """Renderer stub: a solid tile whose red channel encodes the descriptor."""
    value = sum(map(ord, str(descriptor))) % 200 + 50
    return solid_tile((value, 0, 0, 255), tile_size)


def circle_shape() -> ShapeDescriptor:
    return ShapeDescriptor(layers=((Quadrant("C", "u"),) * 4,))


@pytest.fixture
def recording_builder() -> RecordingBuilder:
    return RecordingBuilder()


@pytest.fixture
def circle() -> ShapeDescriptor:
    return circle_shape()
