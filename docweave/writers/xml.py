"""Serializes the (mutated) structure document or part of it."""

from __future__ import annotations

import copy
import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from docweave.templates.models import Transformation
from docweave.writers.base import artifact_path

logger = logging.getLogger(__name__)


class XmlWriter:
    """Writes matched nodes to an XML artifact.

    One node is written as the document root; several are wrapped in an
    element named by the ``root`` parameter (default ``result``). Set the
    ``indent`` parameter to ``false`` for compact output.
    """

    def render(
        self,
        nodes: list[ET.Element] | None,
        transformation: Transformation,
        target: Path,
    ) -> list[Path]:
        if not nodes:
            raise ValueError("xml writer has nothing to serialize")

        params = transformation.parameters
        if len(nodes) == 1:
            root = copy.deepcopy(nodes[0])
        else:
            root = ET.Element(params.get("root", "result"))
            root.extend(copy.deepcopy(n) for n in nodes)
        if params.get("indent", "true").lower() != "false":
            ET.indent(root)

        dest = artifact_path(target, transformation.artifact or "structure.xml")
        dest.parent.mkdir(parents=True, exist_ok=True)
        ET.ElementTree(root).write(dest, encoding="utf-8", xml_declaration=True)
        logger.debug("wrote %s", dest)
        return [dest]
