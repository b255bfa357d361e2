"""Behaviours that drop elements based on their docblock tags."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from collections.abc import Callable

from docweave.document import Document

# Inline `{@internal ...}}` blocks inside descriptions
_INLINE_INTERNAL = re.compile(r"\{@internal.*?\}\}", re.DOTALL)


def has_tag(el: ET.Element, name: str) -> bool:
    docblock = el.find("docblock")
    return docblock is not None and docblock.find(f"tag[@name='{name}']") is not None


def _remove_where(document: Document, predicate: Callable[[ET.Element], bool]) -> int:
    parents = {child: parent for parent in document.root.iter() for child in parent}
    doomed = [el for el in document.root.iter() if el in parents and predicate(el)]
    for el in doomed:
        parents[el].remove(el)
    return len(doomed)


def ignore_tagged(document: Document) -> Document:
    """Drop every element tagged ``@ignore``."""
    _remove_where(document, lambda el: has_tag(el, "ignore"))
    return document


def filter_internal(document: Document) -> Document:
    """Hide internals: ``@internal`` elements, private members and inline internal notes."""
    _remove_where(
        document,
        lambda el: has_tag(el, "internal") or el.get("visibility") == "private",
    )
    for tag in ("description", "long-description"):
        for el in document.iter(tag):
            if el.text and "{@internal" in el.text:
                el.text = _INLINE_INTERNAL.sub("", el.text)
    return document
