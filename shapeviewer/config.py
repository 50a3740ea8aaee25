"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    shapeviewer_env: str = "development"
    shapeviewer_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Role IDs allowed to use the viewer. Empty = everyone.
    viewer_access_roles: list[str] = []

    # Rendering / extraction limits
    tile_size: int = 56
    max_shapes: int = 64
    max_columns: int = 8
    max_modifiers: int = 10

    # Chat integration
    command_name: str = "sbe:viewer"
    attachment_name: str = "shapes.png"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
