"""Tests for the default shape builder and modifier registry."""

import pytest

from shapeviewer.engine.builder import (
    MAX_REPEAT,
    MAX_WORKING_SHAPES,
    ModifierRegistry,
    ModifierSpec,
    apply_modifier,
    build_shapes,
    get_registry,
)
from shapeviewer.engine.extractor import extract_shapes
from shapeviewer.engine.shortkey import parse_short_key, to_short_key
from shapeviewer.errors import InvalidShapeKey, UnknownModifier


def _keys(shapes):
    return [to_short_key(s) for s in shapes]


def _noop(shapes, arg):
    return shapes


def test_plain_key():
    assert _keys(build_shapes("CuRuSuWu", [])) == ["CuRuSuWu"]


def test_rotation_aliases():
    assert build_shapes("CrRgSbWy", ["cw"]) == build_shapes("CrRgSbWy", ["rr"])
    assert build_shapes("CrRgSbWy", ["ccw"]) == build_shapes("CrRgSbWy", ["rl"])
    assert build_shapes("CrRgSbWy", ["180"]) == build_shapes("CrRgSbWy", ["fl"])


def test_modifiers_case_insensitive():
    assert build_shapes("CrRgSbWy", ["CW"]) == build_shapes("CrRgSbWy", ["cw"])


def test_cut_emits_two_shapes():
    assert _keys(build_shapes("CuCuCuCu", ["cut"])) == ["----CuCu", "CuCu----"]


def test_modifiers_apply_left_to_right():
    # Cut first, then rotate both halves
    assert _keys(build_shapes("CuCuCuCu", ["cut", "cw"])) == ["Cu----Cu", "--CuCu--"]


def test_qcut():
    assert len(build_shapes("CrRgSbWy", ["qcut"])) == 4


def test_layers():
    assert _keys(build_shapes("Cu:Rr", ["layers"])) == ["CuCuCuCu", "RrRrRrRr"]


def test_paint():
    assert _keys(build_shapes("CuRuCuRu", ["paint:r"])) == ["CrRrCrRr"]


def test_paint_unknown_color():
    with pytest.raises(UnknownModifier):
        build_shapes("Cu", ["paint:z"])


def test_stack():
    assert _keys(build_shapes("Cu", ["stack:Rr"])) == ["CuCuCuCu:RrRrRrRr"]


def test_stack_invalid_key():
    with pytest.raises(InvalidShapeKey):
        build_shapes("Cu", ["stack:nope"])


def test_repeat():
    assert len(build_shapes("Cu", ["x3"])) == 3
    assert len(build_shapes("Cu", ["cut", "x2"])) == 4


@pytest.mark.parametrize("flag", ["x0", f"x{MAX_REPEAT + 1}", "x"])
def test_repeat_bounds(flag):
    with pytest.raises(UnknownModifier):
        build_shapes("Cu", [flag])


@pytest.mark.parametrize("flag", ["spin", "paint", "cw:2", "stack:"])
def test_bad_modifiers(flag):
    with pytest.raises(UnknownModifier):
        build_shapes("Cu", [flag])


def test_invalid_key():
    with pytest.raises(InvalidShapeKey):
        build_shapes("notashape", [])


def test_default_registry_contents():
    names = {spec.name for spec in get_registry().all()}
    assert {"cw", "ccw", "180", "cut", "qcut", "layers", "paint", "stack"} <= names


def test_registry_rejects_duplicates():
    reg = ModifierRegistry()
    reg.register(ModifierSpec(name="a", fn=_noop, aliases={"b"}))
    with pytest.raises(ValueError):
        reg.register(ModifierSpec(name="b", fn=_noop))
    assert reg.count == 1
    assert reg.get("b").name == "a"


def test_registry_duplicate_alias_registers_nothing():
    reg = ModifierRegistry()
    reg.register(ModifierSpec(name="a", fn=_noop))
    with pytest.raises(ValueError):
        reg.register(ModifierSpec(name="c", fn=_noop, aliases={"a", "d"}))
    assert reg.get("c") is None
    assert reg.get("d") is None
    assert reg.count == 1


def test_default_modifiers_described():
    assert all(spec.description for spec in get_registry().all())


def test_apply_modifier_with_custom_registry():
    reg = ModifierRegistry()
    reg.register(ModifierSpec(name="twice", fn=lambda shapes, arg: shapes * 2))
    shapes = apply_modifier([parse_short_key("Cu")], "twice", registry=reg)
    assert len(shapes) == 2


class TestWithExtractor:
    def test_message_end_to_end(self):
        shapes = extract_shapes("{circle+cut} and {Rr+paint:b}")
        assert _keys(shapes) == ["----CuCu", "CuCu----", "RbRbRbRb"]

    def test_builder_error_aborts_message(self):
        with pytest.raises(InvalidShapeKey):
            extract_shapes("{Cu} {bogus}")


class TestExpansionBound:
    def test_long_repeat_chain_bounded(self):
        shapes = build_shapes("Cu", ["x8"] * 10)
        assert len(shapes) == MAX_WORKING_SHAPES == 64

    def test_cut_after_repeat_bounded(self):
        shapes = build_shapes("CrRgSbWy", ["x8", "x8", "qcut", "cut"])
        assert len(shapes) == 64

    def test_custom_bound(self):
        assert len(build_shapes("Cu", ["x8", "x8"], max_shapes=5)) == 5

    def test_front_of_expansion_kept(self):
        shapes = build_shapes("CrRgSbWy", ["qcut", "x8", "x8"], max_shapes=6)
        assert _keys(shapes) == ["Cr------", "--Rg----", "----Sb--", "------Wy", "Cr------", "--Rg----"]

    def test_extract_long_chain(self):
        shapes = extract_shapes("{Cu" + "+x8" * 10 + "}")
        assert len(shapes) == 64


class TestFlagCleanup:
    def test_padded_flags_stripped(self):
        assert build_shapes("CrRgSbWy", [" cw "]) == build_shapes("CrRgSbWy", ["cw"])

    def test_empty_flags_skipped(self):
        assert build_shapes("CrRgSbWy", ["", "cw", ""]) == build_shapes("CrRgSbWy", ["cw"])

    def test_padded_key_in_message(self):
        assert _keys(extract_shapes("{ Cu + cut }")) == ["----CuCu", "CuCu----"]
