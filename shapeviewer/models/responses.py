"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    max_shapes: int = 0
    tile_size: int = 0


class ParseResponse(BaseModel):
    shapes: list[str] = Field(default_factory=list)
    count: int = 0
    truncated: bool = False


class ModifierInfo(BaseModel):
    name: str
    aliases: list[str] = Field(default_factory=list)
    takes_argument: bool = False
    description: str = ""


class ModifiersResponse(BaseModel):
    modifiers: list[ModifierInfo] = Field(default_factory=list)
    max_modifiers: int = 0
