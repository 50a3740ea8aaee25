"""ShapeViewer instruction engine."""

from shapeviewer.engine.builder import build_shapes, get_registry, modifier
from shapeviewer.engine.extractor import cap_shapes, extract_shapes, iter_tokens, parse_instruction
from shapeviewer.engine.shortkey import parse_short_key, to_short_key

__all__ = [
    "build_shapes",
    "get_registry",
    "modifier",
    "cap_shapes",
    "extract_shapes",
    "iter_tokens",
    "parse_instruction",
    "parse_short_key",
    "to_short_key",
]
