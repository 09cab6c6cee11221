"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from scenesvg import __version__
from scenesvg.models.responses import HealthResponse
from scenesvg.svg.exporters import EXPORTERS

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        exporters_registered=len(EXPORTERS),
    )
