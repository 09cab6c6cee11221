"""Definition registry — per-pass dedup of reusable SVG fragments.

Entries are keyed by (kind, source id) and get ids of the form ``{kind}-{n}``
with an independent counter per kind. A registry belongs to one export session.
"""

from __future__ import annotations

import logging
from typing import Any

from lxml import etree

logger = logging.getLogger(__name__)

CLIP = "clip"
COLOR = "color"
SYMBOL = "symbol"


class DefinitionRegistry:
    def __init__(self) -> None:
        self._counters: dict[str, int] = {}
        self._entries: dict[tuple[str, int], etree._Element] = {}

    def lookup(self, source: Any, kind: str) -> etree._Element | None:
        if source is None:
            return None
        return self._entries.get((kind, source.id))

    def register(self, source: Any, node: etree._Element, kind: str) -> str:
        """Assign the next ``{kind}-{n}`` id to ``node`` and remember it for ``source``."""
        n = self._counters[kind] = self._counters.get(kind, 0) + 1
        node_id = f"{kind}-{n}"
        node.set("id", node_id)
        self._entries[(kind, source.id)] = node
        logger.debug("Registered definition %s for source %s", node_id, source.id)
        return node_id

    def checkpoint(self) -> tuple[dict[str, int], int]:
        return dict(self._counters), len(self._entries)

    def rollback(self, checkpoint: tuple[dict[str, int], int]) -> None:
        """Forget everything registered since ``checkpoint`` and rewind the id counters."""
        counters, size = checkpoint
        for key in list(self._entries)[size:]:
            logger.debug("Dropped definition %s", self._entries[key].get("id"))
            del self._entries[key]
        self._counters = counters

    def entries(self) -> list[etree._Element]:
        """Registered fragments in registration order."""
        return list(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)
