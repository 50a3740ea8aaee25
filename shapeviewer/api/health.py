"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from shapeviewer import __version__
from shapeviewer.dependencies import get_viewer_config
from shapeviewer.models.responses import HealthResponse
from shapeviewer.viewer import ViewerConfig

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(config: ViewerConfig = Depends(get_viewer_config)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        max_shapes=config.max_shapes,
        tile_size=config.tile_size,
    )
