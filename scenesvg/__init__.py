"""scenesvg: export in-memory vector scene graphs as SVG documents."""

__version__ = "0.1.0"
