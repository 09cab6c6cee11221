"""POST /api/export and /api/export/project: scene graph to SVG text."""

from __future__ import annotations

import time

from fastapi import APIRouter, Depends, HTTPException

from scenesvg.dependencies import get_default_options
from scenesvg.errors import SceneSpecError
from scenesvg.models.options import ExportOptions
from scenesvg.models.requests import ExportRequest, ProjectExportRequest
from scenesvg.models.responses import ExportResponse
from scenesvg.scene.loader import build_project, build_scene
from scenesvg.svg.exporter import ExportSession

router = APIRouter()


def _session(options: ExportOptions | None, defaults: ExportOptions) -> ExportSession:
    # Responses always carry text
    return ExportSession.create(options or defaults, as_string=True)


def _response(session: ExportSession, svg: str | None, start: float) -> ExportResponse:
    elapsed = (time.perf_counter() - start) * 1000
    return ExportResponse(
        svg=svg or "",
        definitions=session.definition_count,
        elements=session.element_count,
        processing_time_ms=round(elapsed, 1),
        errors={str(node_id): reason for node_id, reason in session.errors.items()},
    )


@router.post("/export", response_model=ExportResponse)
async def export(
    req: ExportRequest,
    defaults: ExportOptions = Depends(get_default_options),
) -> ExportResponse:
    start = time.perf_counter()
    try:
        item = build_scene(req.scene, req.symbols)
    except SceneSpecError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    session = _session(req.options, defaults)
    svg = session.run(item)
    return _response(session, svg, start)


@router.post("/export/project", response_model=ExportResponse)
async def export_project(
    req: ProjectExportRequest,
    defaults: ExportOptions = Depends(get_default_options),
) -> ExportResponse:
    start = time.perf_counter()
    try:
        project = build_project(req.layers, req.symbols, req.view_size)
    except SceneSpecError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    session = _session(req.options, defaults)
    svg = session.run_project(project)
    return _response(session, svg, start)
