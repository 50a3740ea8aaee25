"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Depends

from shapeviewer.config import Settings, settings
from shapeviewer.viewer import ViewerConfig


def get_settings() -> Settings:
    return settings


def get_viewer_config(settings: Settings = Depends(get_settings)) -> ViewerConfig:
    return ViewerConfig.from_settings(settings)
