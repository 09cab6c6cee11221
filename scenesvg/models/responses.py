"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    exporters_registered: int = 0


class ExportResponse(BaseModel):
    svg: str
    definitions: int = 0
    elements: int = 0
    processing_time_ms: float = 0.0
    errors: dict[str, str] = Field(default_factory=dict, description="Omitted node id -> reason")
