"""Resolves class references to links inside the generated output."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from docweave.behaviours.paths import PATH_ATTRIBUTE
from docweave.document import Document

LINK_ATTRIBUTE = "link"

# Elements whose text is a class reference
_REFERENCE_ELEMENTS = ("extends", "implements", "type")
# Docblock tag attributes that may hold class references (`@param Foo|null`)
_REFERENCE_ATTRIBUTES = ("type", "refers")


def normalize_name(name: str) -> str:
    """Strip whitespace and the leading namespace separator."""
    return name.strip().lstrip("\\")


def class_index(document: Document) -> dict[str, ET.Element]:
    """Map every class and interface in the document by normalized full name."""
    index: dict[str, ET.Element] = {}
    for tag in ("class", "interface"):
        for el in document.iter(tag):
            full_name = el.findtext("full_name") or el.findtext("name")
            if full_name:
                index[normalize_name(full_name)] = el
    return index


def _target(ref: str, links: dict[str, str]) -> str | None:
    # A union type links to its first resolvable member
    for part in ref.split("|"):
        link = links.get(normalize_name(part).removesuffix("[]"))
        if link:
            return link
    return None


def add_link_information(document: Document) -> Document:
    links: dict[str, str] = {}
    for name, el in class_index(document).items():
        path = el.get(PATH_ATTRIBUTE)
        if path:
            anchor = (el.findtext("full_name") or el.findtext("name") or name).strip()
            links[name] = f"{path}#{anchor}"

    if not links:
        return document

    for el in document.iter():
        if el.tag in _REFERENCE_ELEMENTS:
            link = _target(el.text or "", links)
            if link:
                el.set(LINK_ATTRIBUTE, link)
        elif el.tag == "tag":
            for attr in _REFERENCE_ATTRIBUTES:
                link = _target(el.get(attr, ""), links)
                if link:
                    el.set(LINK_ATTRIBUTE, link)
                    break
    return document
