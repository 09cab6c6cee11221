"""Export error types.

The exporter is best-effort: ``ExportError`` subclasses raised while exporting a
single node are caught by the export session, logged, and the node is omitted.
Anything else (invalid options, lxml failures) propagates to the caller.
"""

from __future__ import annotations


class ExportError(Exception):
    """Base class for per-node export failures."""


class DegenerateGeometryError(ExportError, ValueError):
    """Node geometry cannot be expressed (non-finite numbers, missing pixels, unknown shape)."""


class UnserializableDataError(ExportError, TypeError):
    """A node's associated data blob is not JSON-serializable."""


class SceneSpecError(ValueError):
    """A scene description could not be turned into scene items."""


class InvalidStyleError(ExportError, ValueError):
    """A style value has no SVG spelling."""
