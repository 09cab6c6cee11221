"""Export options, validated once and shared read-only by every export component."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from scenesvg.utils.formatter import DEFAULT_PRECISION


class ExportOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    precision: StrictInt = Field(
        default=DEFAULT_PRECISION,
        ge=0,
        description="Decimal places kept when formatting numbers",
    )
    match_shapes: bool = Field(
        default=False,
        description="Recognise rectangle/circle/ellipse paths and export them as native shapes",
    )
    as_string: bool = Field(default=False, description="Return serialized text instead of an lxml element")
    margin: float = Field(default=0.0, ge=0, description="Padding around computed project bounds")
    embed_data: bool = Field(default=True, description="Attach each node's data blob as a JSON attribute")

    @classmethod
    def from_settings(cls, **overrides: Any) -> ExportOptions:
        """Defaults from application settings, with ``overrides`` applied on top."""
        from scenesvg.config import settings

        values: dict[str, Any] = {
            "precision": settings.default_precision,
            "match_shapes": settings.default_match_shapes,
            "margin": settings.default_margin,
        }
        values.update(overrides)
        return cls.model_validate(values)

    @classmethod
    def coerce(cls, options: ExportOptions | None = None, **overrides: Any) -> ExportOptions:
        if options is None:
            return cls(**overrides)
        if not overrides:
            return options
        return cls.model_validate({**options.model_dump(), **overrides})
