"""Message handling — turns a chat message into an optional PNG.

The core is ``view_message``: a pure function of (text, config). Everything
around it is a thin adapter:

- ``execute`` is the interactive entry point. It enforces the role check and
  lets every error reach the caller.
- ``watch`` is the passive entry point used for every incoming message. It
  filters out bots and messages without a token, and logs and drops errors.
- ``MessageWatcher.attach`` subscribes ``watch`` to a message source and
  returns a ``Subscription`` whose ``detach()`` undoes it.
"""

from __future__ import annotations

import functools
import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Protocol

from shapeviewer.engine.builder import build_shapes
from shapeviewer.engine.extractor import (
    MAX_MODIFIERS,
    MAX_SHAPES,
    START_MARKER,
    ShapeBuilder,
    cap_shapes,
    extract_shapes,
)
from shapeviewer.errors import DirectInvocationError
from shapeviewer.render.compositor import DEFAULT_TILE_SIZE, MAX_COLUMNS, TileRenderer, render_shapes
from shapeviewer.render.tile import render_tile

if TYPE_CHECKING:
    from shapeviewer.config import Settings

logger = logging.getLogger(__name__)

MESSAGE_EVENT = "message_create"

SendFn = Callable[[bytes, str], Any]


@dataclass(frozen=True)
class ViewerConfig:
    tile_size: int = DEFAULT_TILE_SIZE
    max_shapes: int = MAX_SHAPES
    max_columns: int = MAX_COLUMNS
    max_modifiers: int = MAX_MODIFIERS
    command_name: str = "sbe:viewer"
    attachment_name: str = "shapes.png"
    # Empty = no role gating
    access_roles: frozenset[str] = frozenset()

    @classmethod
    def from_settings(cls, settings: Settings) -> ViewerConfig:
        return cls(
            tile_size=settings.tile_size,
            max_shapes=settings.max_shapes,
            max_columns=settings.max_columns,
            max_modifiers=settings.max_modifiers,
            command_name=settings.command_name,
            attachment_name=settings.attachment_name,
            access_roles=frozenset(settings.viewer_access_roles),
        )


def default_builder(config: ViewerConfig) -> ShapeBuilder:
    """build_shapes bounded by the configured shape cap."""
    return functools.partial(build_shapes, max_shapes=config.max_shapes)


@dataclass(frozen=True)
class AccessPolicy:
    """Role gate: a caller passes if they hold any allowed role."""

    roles: frozenset[str] = frozenset()

    def allows(self, caller_roles: Iterable[str]) -> bool:
        if not self.roles:
            return True
        return any(role in self.roles for role in caller_roles)


@dataclass(frozen=True)
class ChatMessage:
    """The parts of a chat message the viewer looks at."""

    content: str
    author_is_bot: bool = False
    roles: frozenset[str] = frozenset()


def view_message(
    text: str,
    config: ViewerConfig | None = None,
    builder: ShapeBuilder | None = None,
    renderer: TileRenderer = render_tile,
) -> bytes | None:
    """PNG bytes for every shape in ``text``, or None if it has none."""
    config = config or ViewerConfig()
    builder = builder or default_builder(config)
    shapes = extract_shapes(text, builder, config.max_modifiers)
    shapes = cap_shapes(shapes, config.max_shapes)
    if not shapes:
        return None
    return render_shapes(shapes, renderer, config.tile_size, config.max_columns)


def execute(
    message: ChatMessage,
    config: ViewerConfig | None = None,
    builder: ShapeBuilder | None = None,
    renderer: TileRenderer = render_tile,
) -> bytes | None:
    """Interactive entry point. Errors propagate.

    Raises:
        DirectInvocationError: the message is the viewer command itself.
    """
    config = config or ViewerConfig()
    if message.content.lower().startswith(config.command_name.lower()):
        raise DirectInvocationError("You are not supposed to directly call this command")

    if not AccessPolicy(config.access_roles).allows(message.roles):
        # Ignore users who cannot use the viewer
        return None

    return view_message(message.content, config, builder, renderer)


def watch(
    message: ChatMessage,
    send: SendFn,
    config: ViewerConfig | None = None,
    builder: ShapeBuilder | None = None,
    renderer: TileRenderer = render_tile,
) -> bool:
    """Passive entry point. Never raises; returns True if an image was sent."""
    config = config or ViewerConfig()
    if message.author_is_bot or START_MARKER not in message.content:
        return False

    try:
        image = execute(message, config, builder, renderer)
        if image is None:
            return False
        send(image, config.attachment_name)
        return True
    except Exception as e:
        # Passive mode: log only
        logger.warning("Viewer ignored message: %s", e)
        return False


class MessageSource(Protocol):
    def on(self, event_name: str, handler: Callable[..., Any]) -> None: ...

    def off(self, event_name: str, handler: Callable[..., Any]) -> None: ...


class LocalMessageSource:
    """Minimal synchronous event source (on/off/emit)."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Callable[..., Any]]] = defaultdict(list)

    def on(self, event_name: str, handler: Callable[..., Any]) -> None:
        self._handlers[event_name].append(handler)
        logger.debug("Registered listener: %s -> %s", event_name, getattr(handler, "__name__", handler))

    def off(self, event_name: str, handler: Callable[..., Any]) -> None:
        handlers = self._handlers.get(event_name, [])
        if handler in handlers:
            handlers.remove(handler)
            if not handlers:
                del self._handlers[event_name]

    def emit(self, event_name: str, *args: Any) -> None:
        for handler in list(self._handlers.get(event_name, [])):
            handler(*args)

    def listener_count(self, event_name: str) -> int:
        return len(self._handlers.get(event_name, []))


@dataclass
class Subscription:
    """Handle returned by MessageWatcher.attach()."""

    source: MessageSource
    event_name: str
    handler: Callable[..., Any]
    active: bool = True

    def detach(self) -> None:
        if not self.active:
            return
        self.source.off(self.event_name, self.handler)
        self.active = False
        logger.info("Viewer detached from %s", self.event_name)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc: object) -> None:
        self.detach()


@dataclass
class MessageWatcher:
    """Binds ``watch`` to a config, a send callback and collaborators."""

    send: SendFn
    config: ViewerConfig = field(default_factory=ViewerConfig)
    builder: ShapeBuilder | None = None
    renderer: TileRenderer = render_tile

    def handle(self, message: ChatMessage) -> bool:
        return watch(message, self.send, self.config, self.builder, self.renderer)

    def attach(self, source: MessageSource, event_name: str = MESSAGE_EVENT) -> Subscription:
        source.on(event_name, self.handle)
        logger.info("Viewer attached to %s", event_name)
        return Subscription(source=source, event_name=event_name, handler=self.handle)
