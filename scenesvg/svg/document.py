"""Host document helpers — thin facade over lxml for building SVG elements."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from lxml import etree

from scenesvg.utils.formatter import Formatter

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
NSMAP = {None: SVG_NS, "xlink": XLINK_NS}

# Attributes that live in a namespace other than the element's
_ATTRIBUTE_NAMESPACES = {"href": XLINK_NS}

# Characters XML 1.0 cannot carry in text content
_ILLEGAL_XML_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def create_element(
    tag: str,
    attrs: Mapping[str, Any] | None = None,
    formatter: Formatter | None = None,
) -> etree._Element:
    node = etree.Element(f"{{{SVG_NS}}}{tag}", nsmap=NSMAP)
    if attrs:
        set_attributes(node, attrs, formatter)
    return node


def set_attributes(
    node: etree._Element,
    attrs: Mapping[str, Any],
    formatter: Formatter | None = None,
) -> etree._Element:
    """Set attributes in order; numbers go through ``formatter``, None values are skipped."""
    for key, value in attrs.items():
        if value is None:
            continue
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = (formatter or Formatter()).number(value)
        namespace = _ATTRIBUTE_NAMESPACES.get(key)
        node.set(f"{{{namespace}}}{key}" if namespace else key, str(value))
    return node


def set_text(node: etree._Element, text: str) -> None:
    """Set element text content; lxml applies text-content escaping."""
    node.text = _ILLEGAL_XML_RE.sub(" ", text)


def local_name(node: etree._Element) -> str:
    return etree.QName(node).localname


def serialize(node: etree._Element) -> str:
    etree.cleanup_namespaces(node, top_nsmap=NSMAP)
    return etree.tostring(node, encoding="unicode")
