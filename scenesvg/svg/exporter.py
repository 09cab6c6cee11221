"""Export driver — walks a scene, dispatches per node kind, and finalizes definitions."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any

from lxml import etree

from scenesvg.errors import ExportError, UnserializableDataError
from scenesvg.models.options import ExportOptions
from scenesvg.scene.items import Item
from scenesvg.scene.project import Project
from scenesvg.svg import document
from scenesvg.svg.definitions import DefinitionRegistry
from scenesvg.svg.exporters import get_exporter
from scenesvg.svg.styles import apply_style
from scenesvg.utils.formatter import Formatter
from scenesvg.utils.geometry import Rect

logger = logging.getLogger(__name__)

DATA_ATTRIBUTE = "data-scene-data"


@dataclass
class ExportSession:
    """State for one export pass: options, formatter, definition registry, error log."""

    options: ExportOptions
    formatter: Formatter
    definitions: DefinitionRegistry = field(default_factory=DefinitionRegistry)
    # node id -> reason the node was omitted
    errors: dict[int, str] = field(default_factory=dict)
    element_count: int = 0
    definition_count: int = 0

    @classmethod
    def create(cls, options: ExportOptions | None = None, **overrides: Any) -> ExportSession:
        options = ExportOptions.coerce(options, **overrides)
        return cls(options=options, formatter=Formatter(options.precision))

    # ── Host document helpers bound to this session's formatter ──

    def create_element(self, tag: str, attrs: dict[str, Any] | None = None) -> etree._Element:
        return document.create_element(tag, attrs, self.formatter)

    def set_attributes(self, node: etree._Element, attrs: dict[str, Any]) -> etree._Element:
        return document.set_attributes(node, attrs, self.formatter)

    # ── Recursive export ──

    def export(self, item: Item) -> etree._Element | None:
        """Export one item and its subtree; None when the item produces nothing."""
        kind = getattr(item, "kind", None)
        fn = get_exporter(kind)
        if fn is None:
            logger.debug("No exporter for %r, skipping", kind)
            return None

        # An omitted node takes its definitions and counted descendants with it
        checkpoint = self.definitions.checkpoint()
        element_count = self.element_count
        try:
            node = fn(item, self)
            if node is None:
                return None
            if self.options.embed_data:
                self._set_data(item, node)
            apply_style(item, node, self)
        except ExportError as e:
            self.definitions.rollback(checkpoint)
            self.element_count = element_count
            self.errors[item.id] = str(e)
            logger.warning("  %s %d omitted: %s", kind, item.id, e)
            return None

        self.element_count += 1
        return node

    def _set_data(self, item: Item, node: etree._Element) -> None:
        if item.data is None or item.data in ({}, []):
            return
        try:
            blob = json.dumps(item.data, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise UnserializableDataError(f"data of {item.kind} {item.id} is not JSON-serializable: {e}") from e
        node.set(DATA_ATTRIBUTE, blob)

    # ── Finalization ──

    def finish(self, node: etree._Element | None) -> etree._Element | str | None:
        """Attach collected definitions to the output and serialize when requested."""
        if node is not None and len(self.definitions):
            if document.local_name(node) != "svg":
                root = self.create_element("svg", {"version": "1.1"})
                root.append(node)
                node = root
            defs = self.create_element("defs")
            for entry in self.definitions.entries():
                defs.append(entry)
            node.insert(0, defs)

        self.definition_count = len(self.definitions)
        # Definitions only live for one pass
        self.definitions = DefinitionRegistry()

        if node is not None and self.options.as_string:
            return document.serialize(node)
        return node

    def run(self, item: Item) -> etree._Element | str | None:
        start = time.perf_counter()
        result = self.finish(self.export(item))
        self._log_pass("Export", start)
        return result

    def run_project(self, project: Project) -> etree._Element | str | None:
        start = time.perf_counter()
        root = self.create_element("svg", _project_attributes(project, self.options, self.formatter))
        for layer in project.layers:
            node = self.export(layer)
            if node is not None:
                root.append(node)
        result = self.finish(root)
        self._log_pass("Project export", start)
        return result

    def _log_pass(self, label: str, start: float) -> None:
        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "%s complete: %d elements, %d definitions, %d omitted in %.1fms",
            label,
            self.element_count,
            self.definition_count,
            len(self.errors),
            elapsed,
        )


def _project_attributes(project: Project, options: ExportOptions, formatter: Formatter) -> dict[str, Any]:
    if project.view_size is not None:
        width, height = project.view_size
        view_box = Rect(0.0, 0.0, width, height)
    else:
        view_box = (project.bounds or Rect(0.0, 0.0, 0.0, 0.0)).expand(options.margin)
        width, height = view_box.width, view_box.height
    return {
        "x": 0,
        "y": 0,
        "width": width,
        "height": height,
        "viewBox": formatter.rectangle(view_box, " "),
        "version": "1.1",
    }


def export_svg(
    item: Item, options: ExportOptions | None = None, **overrides: Any
) -> etree._Element | str | None:
    """Export ``item`` as an SVG element, or as text when ``as_string`` is set."""
    return ExportSession.create(options, **overrides).run(item)


def export_project(
    project: Project, options: ExportOptions | None = None, **overrides: Any
) -> etree._Element | str | None:
    """Export every layer of ``project`` under one sized ``<svg>`` root."""
    return ExportSession.create(options, **overrides).run_project(project)
