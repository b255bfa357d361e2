"""Flattens inheritance: classes receive the members of their known ancestors."""

from __future__ import annotations

import copy
import xml.etree.ElementTree as ET

from docweave.behaviours.links import class_index, normalize_name
from docweave.document import Document

MEMBER_TAGS = ("method", "property", "constant")


def _member_key(member: ET.Element) -> tuple[str, str]:
    return member.tag, normalize_name(member.findtext("name") or "").lstrip("$")


def inherit(document: Document) -> Document:
    """Copy non-overridden members of every ancestor found in the document.

    Copied members carry an ``inherited_from`` child naming the class that
    declared them. Private members are never inherited. Ancestors outside the
    document are ignored; an inheritance cycle raises ValueError.
    """
    classes = class_index(document)
    done: set[str] = set()

    def _flatten(name: str, el: ET.Element, chain: tuple[str, ...]) -> None:
        if name in done:
            return
        if name in chain:
            raise ValueError(f"Inheritance cycle: {' -> '.join(chain + (name,))}")

        own = {_member_key(m) for m in el if m.tag in MEMBER_TAGS}
        for ext in el.findall("extends"):
            parent_name = normalize_name(ext.text or "")
            parent = classes.get(parent_name)
            if parent is None:
                continue
            _flatten(parent_name, parent, chain + (name,))
            declared_by = parent.findtext("full_name") or parent_name

            for member in parent:
                if member.tag not in MEMBER_TAGS:
                    continue
                key = _member_key(member)
                if key in own or member.get("visibility") == "private":
                    continue
                clone = copy.deepcopy(member)
                if clone.find("inherited_from") is None:
                    ET.SubElement(clone, "inherited_from").text = declared_by
                el.append(clone)
                own.add(key)

        done.add(name)

    for name, el in classes.items():
        _flatten(name, el, ())
    return document
