"""POST /api/parse, /api/view and GET /api/modifiers — shape extraction and rendering."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from shapeviewer.dependencies import get_viewer_config
from shapeviewer.engine.builder import MAX_REPEAT, get_registry
from shapeviewer.engine.extractor import cap_shapes, extract_shapes
from shapeviewer.engine.shortkey import to_short_key
from shapeviewer.errors import ViewerError
from shapeviewer.models.requests import ParseRequest, ViewRequest
from shapeviewer.models.responses import ModifierInfo, ModifiersResponse, ParseResponse
from shapeviewer.viewer import AccessPolicy, ViewerConfig, default_builder, view_message

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/parse", response_model=ParseResponse)
def parse(req: ParseRequest, config: ViewerConfig = Depends(get_viewer_config)) -> ParseResponse:
    try:
        shapes = extract_shapes(req.message, default_builder(config), config.max_modifiers)
    except ViewerError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    capped = cap_shapes(shapes, config.max_shapes)
    return ParseResponse(
        shapes=[to_short_key(s) for s in capped],
        count=len(capped),
        truncated=len(shapes) > len(capped),
    )


@router.post("/view")
def view(req: ViewRequest, config: ViewerConfig = Depends(get_viewer_config)) -> Response:
    if not AccessPolicy(config.access_roles).allows(req.roles):
        raise HTTPException(status_code=403, detail="Viewer access denied")

    try:
        image = view_message(req.message, config)
    except ViewerError as e:
        logger.info("Rejected view request: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e

    if image is None:
        return Response(status_code=204)

    return Response(
        content=image,
        media_type="image/png",
        headers={"Content-Disposition": f'inline; filename="{config.attachment_name}"'},
    )


@router.get("/modifiers", response_model=ModifiersResponse)
def modifiers(config: ViewerConfig = Depends(get_viewer_config)) -> ModifiersResponse:
    infos = [
        ModifierInfo(
            name=spec.name,
            aliases=sorted(spec.aliases),
            takes_argument=spec.takes_argument,
            description=spec.description,
        )
        for spec in get_registry().all()
    ]
    infos.append(ModifierInfo(name="x<n>", description=f"Repeat the shapes n times, 1-{MAX_REPEAT}"))
    return ModifiersResponse(modifiers=infos, max_modifiers=config.max_modifiers)
