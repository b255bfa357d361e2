"""Renders query results through Jinja2 templates shipped with the theme."""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from docweave.document import generate_filename
from docweave.templates.models import Transformation
from docweave.writers.base import artifact_path

logger = logging.getLogger(__name__)

# `{generated-path}` in an artifact name renders one artifact per matched node
_PLACEHOLDER = re.compile(r"\{([\w-]+)\}")


def expand_artifact(artifact: str, node: ET.Element) -> str | None:
    """Fill ``{attribute}`` placeholders from *node*. None if one is missing."""
    missing: list[str] = []

    def _sub(m: re.Match) -> str:
        value = node.get(m.group(1))
        if value is None:
            missing.append(m.group(1))
            return ""
        return value

    name = _PLACEHOLDER.sub(_sub, artifact)
    return None if missing else name


class JinjaWriter:
    def __init__(self) -> None:
        self._environments: dict[Path, Environment] = {}

    def _environment(self, template_dir: Path) -> Environment:
        env = self._environments.get(template_dir)
        if env is None:
            env = Environment(
                loader=FileSystemLoader(str(template_dir)),
                autoescape=select_autoescape(["html", "xml", "html.j2", "xml.j2"]),
                undefined=StrictUndefined,
                keep_trailing_newline=True,
            )
            env.globals["generate_filename"] = generate_filename
            self._environments[template_dir] = env
        return env

    def render(
        self,
        nodes: list[ET.Element] | None,
        transformation: Transformation,
        target: Path,
    ) -> list[Path]:
        if not transformation.source:
            raise ValueError("jinja writer requires a source template")

        env = self._environment(transformation.template_path or Path("."))
        template = env.get_template(transformation.source)
        context = {
            "nodes": nodes or [],
            "parameters": dict(transformation.parameters),
            "transformation": transformation,
        }
        # index.html.j2 -> index.html
        artifact = transformation.artifact or Path(transformation.source).stem

        if not _PLACEHOLDER.search(artifact):
            dest = artifact_path(target, artifact)
            node = nodes[0] if nodes else None
            self._write(dest, template.render(node=node, **context))
            return [dest]

        written: list[Path] = []
        for node in nodes or []:
            name = expand_artifact(artifact, node)
            if name is None:
                logger.warning("skipping <%s>: no attributes for artifact %r", node.tag, artifact)
                continue
            dest = artifact_path(target, name)
            self._write(dest, template.render(node=node, **context))
            written.append(dest)
        return written

    @staticmethod
    def _write(dest: Path, content: str) -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(content, encoding="utf-8")
        logger.debug("wrote %s (%d bytes)", dest, len(content))
