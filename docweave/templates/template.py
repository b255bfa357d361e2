"""Template — a named, ordered list of transformations loaded from template.yaml."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import yaml
from pydantic import ValidationError

from docweave.errors import TemplateDefinitionError
from docweave.templates.models import TemplateDefinition, TemplateId, Transformation

logger = logging.getLogger(__name__)

DEFINITION_FILE = "template.yaml"


def parse_definition(text: str, source: str | Path = "<string>") -> TemplateDefinition:
    """Parse and validate the YAML text of a template definition."""
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise TemplateDefinitionError(f"Invalid YAML in {source}: {e}") from e
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise TemplateDefinitionError(
            f"Template definition {source} must be a mapping, got {type(raw).__name__}"
        )
    try:
        return TemplateDefinition(**raw)
    except ValidationError as e:
        raise TemplateDefinitionError(f"Invalid template definition in {source}: {e}") from e


def merge_transformations(
    inherited: list[Transformation], own: list[Transformation]
) -> list[Transformation]:
    """Layer *own* on top of *inherited*.

    A step producing the same artifact as an inherited one takes its place;
    every other step is appended in declaration order.
    """
    merged = list(inherited)
    positions = {t.artifact: i for i, t in enumerate(merged) if t.artifact}
    for t in own:
        if t.artifact and t.artifact in positions:
            merged[positions[t.artifact]] = t
        else:
            if t.artifact:
                positions[t.artifact] = len(merged)
            merged.append(t)
    return merged


class Template:
    def __init__(self, template_id: TemplateId, path: Path) -> None:
        self.id = template_id
        self.path = path
        self.definition = TemplateDefinition()
        self.transformations: list[Transformation] = []

    @property
    def name(self) -> str:
        return self.id.name

    def populate(self, text: str, load_base: Callable[[str], Template]) -> None:
        """Fill the transformation list from definition *text*.

        Base templates named in ``extends`` are loaded through *load_base* and
        contribute their transformations first.
        """
        self.definition = parse_definition(text, self.path / DEFINITION_FILE)

        merged: list[Transformation] = []
        for base_name in self.definition.extends:
            base = load_base(base_name)
            logger.debug("template %s extends %s", self.name, base.name)
            merged = merge_transformations(merged, base.transformations)

        own = [
            t.model_copy(update={"template_path": self.path})
            for t in self.definition.transformations
        ]
        self.transformations = merge_transformations(merged, own)

    def __iter__(self) -> Iterator[Transformation]:
        return iter(self.transformations)

    def __len__(self) -> int:
        return len(self.transformations)

    def __repr__(self) -> str:
        return f"Template(name={self.name!r}, path={str(self.path)!r}, transformations={len(self)})"
