"""TemplateSet — the ordered templates of a run and their flattened transformations."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from enum import Enum

from docweave.errors import ConfigurationError
from docweave.templates.models import Transformation
from docweave.templates.resolver import TemplateResolver
from docweave.templates.template import Template

logger = logging.getLogger(__name__)


class DuplicatePolicy(str, Enum):
    """What happens when a template name is registered a second time."""

    skip = "skip"  # first registration wins
    shadow = "shadow"  # later registration replaces the earlier one in place


class TemplateSet:
    def __init__(
        self,
        resolver: TemplateResolver,
        policy: DuplicatePolicy | str = DuplicatePolicy.skip,
    ) -> None:
        self.resolver = resolver
        self.policy = DuplicatePolicy(policy)
        self._templates: dict[str, Template] = {}
        self._frozen = False

    def add(self, name_or_path: str) -> Template:
        """Resolve and register a template; registration order is execution order."""
        if self._frozen:
            raise ConfigurationError(
                f"Cannot add template '{name_or_path}': template set is frozen"
            )

        template_id = self.resolver.identify(name_or_path)
        existing = self._templates.get(template_id.name)
        if existing is not None and self.policy is DuplicatePolicy.skip:
            logger.debug("template %s already registered, skipping", template_id.name)
            return existing

        template = self.resolver.load(template_id)
        if existing is not None:
            logger.info("template %s shadows its earlier registration", template_id.name)
        # Re-assigning an existing key keeps its original position
        self._templates[template_id.name] = template
        return template

    def extend(self, names: Iterable[str]) -> None:
        for name in names:
            self.add(name)

    def transformations(self) -> list[Transformation]:
        """All transformations: templates in registration order, each in declaration order."""
        return [t for template in self._templates.values() for t in template]

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def names(self) -> list[str]:
        return list(self._templates)

    def get(self, name: str) -> Template | None:
        return self._templates.get(name)

    def __getitem__(self, name: str) -> Template:
        return self._templates[name]

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __iter__(self) -> Iterator[Template]:
        return iter(self._templates.values())

    def __len__(self) -> int:
        return len(self._templates)
