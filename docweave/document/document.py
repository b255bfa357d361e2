"""Structure document: the XML tree produced by the parser.

The transformer treats the tree as opaque. Behaviours mutate it, writers
query it; both go through :class:`Document`.
"""

from __future__ import annotations

import copy
import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from docweave.errors import MalformedSourceError

logger = logging.getLogger(__name__)

# Inline structure content is recognised by the XML declaration.
XML_MARKER = "<?xml"


def is_inline(source: str) -> bool:
    """True when *source* is XML text rather than a path."""
    return source.lstrip().startswith(XML_MARKER)


class Document:
    """Mutable wrapper around an ElementTree root element."""

    def __init__(self, root: ET.Element) -> None:
        self.root = root

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_string(cls, text: str) -> Document:
        try:
            root = ET.fromstring(text.strip())
        except ET.ParseError as e:
            raise MalformedSourceError(f"Malformed structure document: {e}") from e
        return cls(root)

    @classmethod
    def from_path(cls, path: str | Path) -> Document:
        try:
            tree = ET.parse(path)
        except ET.ParseError as e:
            raise MalformedSourceError(f"Malformed structure file {path}: {e}") from e
        logger.debug("parsed structure file %s", path)
        return cls(tree.getroot())

    def copy(self) -> Document:
        """Independent deep copy of the tree."""
        return Document(copy.deepcopy(self.root))

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def query(self, path: str) -> list[ET.Element]:
        """Evaluate an ElementTree XPath expression against the document.

        Absolute forms are accepted as well: ``/`` and ``.`` select the root,
        ``//name`` searches the whole tree and ``/project/file`` is anchored
        at the root element. Raises SyntaxError for unsupported expressions.
        """
        expr = path.strip()
        if expr in ("", "/", "."):
            return [self.root]
        if expr.startswith("//"):
            return self.root.findall("." + expr)
        if expr.startswith("/"):
            head, _, rest = expr[1:].partition("/")
            if head not in (self.root.tag, "*"):
                return []
            if not rest:
                return [self.root]
            return self.root.findall("./" + rest)
        return self.root.findall(expr)

    def iter(self, tag: str | None = None):
        return self.root.iter(tag)

    def to_string(self) -> str:
        return ET.tostring(self.root, encoding="unicode")

    def write(self, path: str | Path) -> None:
        ET.ElementTree(self.root).write(path, encoding="utf-8", xml_declaration=True)

    def __repr__(self) -> str:
        return f"Document(root=<{self.root.tag}>, elements={sum(1 for _ in self.root.iter())})"


def parse(raw_or_path: str | Path) -> Document:
    """Parse inline XML text or a structure file into a Document."""
    if isinstance(raw_or_path, str) and is_inline(raw_or_path):
        return Document.from_string(raw_or_path)
    return Document.from_path(raw_or_path)
