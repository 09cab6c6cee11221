"""FastAPI dependency injection."""

from __future__ import annotations

from scenesvg.models.options import ExportOptions


def get_default_options() -> ExportOptions:
    return ExportOptions.from_settings()
