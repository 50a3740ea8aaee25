"""Tests for the single-tile renderer (SVG -> CairoSVG -> Pillow)."""

import numpy as np
import pytest

from shapeviewer.engine.shortkey import parse_short_key
from shapeviewer.render.tile import PALETTE, descriptor_to_svg, render_tile


class TestDescriptorToSvg:
    def test_produces_valid_svg(self, circle):
        svg = descriptor_to_svg(circle)
        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")
        assert svg.count("<path") == 4

    def test_empty_quadrants_not_drawn(self):
        svg = descriptor_to_svg(parse_short_key("Cr------"))
        assert svg.count("<path") == 1
        assert PALETTE["r"] in svg

    def test_every_layer_drawn(self):
        svg = descriptor_to_svg(parse_short_key("Cu:Rr:Sg:Wb"))
        assert svg.count("<path") == 16
        for color in "urgb":
            assert PALETTE[color] in svg

    def test_quadrants_rotated_into_place(self):
        svg = descriptor_to_svg(parse_short_key("CrRgSbWy"))
        for angle in (0, 90, 180, 270):
            assert f"rotate({angle})" in svg


class TestRenderTile:
    def test_tile_size(self, circle):
        tile = render_tile(circle, 56)
        assert tile.size == (56, 56)
        assert tile.mode == "RGBA"

    @pytest.mark.parametrize("size", [16, 32, 100])
    def test_other_sizes(self, circle, size):
        assert render_tile(circle, size).size == (size, size)

    def test_corners_transparent_center_opaque(self, circle):
        pixels = np.array(render_tile(circle, 56))
        assert pixels[0, 0, 3] == 0
        assert pixels[28, 28, 3] == 255

    def test_deterministic(self):
        shape = parse_short_key("rocket")
        a = np.array(render_tile(shape, 56))
        b = np.array(render_tile(shape, 56))
        assert np.array_equal(a, b)

    def test_color_visible(self):
        red = np.array(render_tile(parse_short_key("Rr"), 56))
        blue = np.array(render_tile(parse_short_key("Rb"), 56))
        assert not np.array_equal(red, blue)
