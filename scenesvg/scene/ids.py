"""Process-wide id source for scene objects (items, colours, symbols)."""

from __future__ import annotations

import itertools

_counter = itertools.count(1)


def new_id() -> int:
    return next(_counter)
