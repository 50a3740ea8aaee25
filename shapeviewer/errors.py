"""Viewer exception hierarchy.

Everything raised on purpose derives from ViewerError so callers can tell a
rejected message apart from a legitimate empty result (no shapes found).
"""

from __future__ import annotations


class ViewerError(Exception):
    """Base class for all viewer errors."""


class ModifierLimitExceeded(ViewerError):
    """A token carried more modifiers than allowed. Aborts the whole message."""

    def __init__(self, count: int, limit: int) -> None:
        super().__init__(f"Limit of modifiers reached ({count} > {limit})")
        self.count = count
        self.limit = limit


class ShapeBuildError(ViewerError):
    """Raised by a shape builder for a token it cannot turn into shapes."""


class InvalidShapeKey(ShapeBuildError):
    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Invalid shape key {key!r}: {reason}")
        self.key = key
        self.reason = reason


class UnknownModifier(ShapeBuildError):
    def __init__(self, modifier: str, reason: str = "unknown modifier") -> None:
        super().__init__(f"{reason}: {modifier!r}")
        self.modifier = modifier


class DirectInvocationError(ViewerError):
    """The viewer command was typed directly instead of being picked up by the watcher."""
