"""Transformer — turns a structure document into artifacts.

A run has two phases. The behaviour chain mutates a copy of the source
document; then every transformation of every registered template executes,
in template registration order, against the mutated copy. Behaviour failures
abort the run. Transformation failures are logged, recorded in the report and
the run continues with the next transformation.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from docweave.behaviours import Behaviour, BehaviourCollection, build_behaviours
from docweave.document import Document, generate_filename, is_inline
from docweave.errors import ConfigurationError, TransformationError
from docweave.templates import (
    DuplicatePolicy,
    Template,
    TemplateResolver,
    TemplateSet,
    Transformation,
)
from docweave.transformer.models import TransformationFailure, TransformReport
from docweave.transformer.observer import TransformObserver
from docweave.writers import WriterRegistry

if TYPE_CHECKING:
    from docweave.config.models import DocweaveConfig

logger = logging.getLogger(__name__)


class Transformer:
    generate_filename = staticmethod(generate_filename)

    def __init__(
        self,
        themes_path: str | Path | None = None,
        *,
        writers: WriterRegistry | None = None,
        template_conflicts: DuplicatePolicy | str = DuplicatePolicy.skip,
    ) -> None:
        self.target: Path | None = None
        self.source: Document | None = None
        self.parse_private = False
        self.writers = writers or WriterRegistry()
        self._conflicts = DuplicatePolicy(template_conflicts)
        self._extra_behaviours: list[Behaviour] = []
        self.set_themes_path(themes_path)

    @classmethod
    def from_config(cls, config: DocweaveConfig) -> Transformer:
        """Build a transformer with target, source and templates from config."""
        tc = config.transformer
        transformer = cls(tc.themes_path, template_conflicts=tc.template_conflicts)
        transformer.set_parse_private(tc.parse_private)
        transformer.set_target(tc.target)
        if tc.source:
            transformer.set_source(tc.source)
        transformer.set_templates(tc.templates)
        return transformer

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    @property
    def themes_path(self) -> Path:
        return self.resolver.themes_path

    def set_themes_path(self, path: str | Path | None) -> None:
        """Point template resolution at another themes root.

        Templates registered before the change are dropped.
        """
        self.resolver = TemplateResolver(path)
        self.templates = TemplateSet(self.resolver, self._conflicts)

    def set_target(self, target: str | Path) -> None:
        path = Path(target).expanduser()
        if not path.exists():
            raise ConfigurationError(f"Given target directory ({target}) does not exist")
        if not path.is_dir():
            raise ConfigurationError(f"Given target ({target}) is not a directory")
        if not os.access(path, os.W_OK):
            raise ConfigurationError(f"Given target directory ({target}) is not writable")
        self.target = path.resolve()

    def set_source(self, source: str | Path) -> None:
        """Load the structure document from inline XML text or a file path."""
        if isinstance(source, str):
            source = source.strip()
            if is_inline(source):
                self.source = Document.from_string(source)
                return

        path = Path(source).expanduser()
        if not path.is_file() or not os.access(path, os.R_OK):
            raise ConfigurationError(f"Given source ({source}) does not exist or is not readable")
        self.source = Document.from_path(path.resolve())

    def set_parse_private(self, value: bool) -> None:
        """Whether private members and ``@internal`` elements stay in the output."""
        self.parse_private = bool(value)

    def set_templates(self, templates: str | Iterable[str]) -> None:
        """Replace the registered templates with *templates*, in order."""
        if isinstance(templates, str):
            templates = [templates]
        self.templates = TemplateSet(self.resolver, self._conflicts)
        self.templates.extend(templates)

    def add_template(self, name: str) -> Template:
        return self.templates.add(name)

    def add_behaviour(self, behaviour: Behaviour) -> None:
        """Append a behaviour after the defaults (still before the visibility filter)."""
        self._extra_behaviours.append(behaviour)

    def behaviours(self) -> list[Behaviour]:
        """The effective behaviour chain for the current configuration."""
        return build_behaviours(self.parse_private, self._extra_behaviours)

    def get_transformations(self) -> list[Transformation]:
        return self.templates.transformations()

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def execute(self, observer: TransformObserver | None = None) -> TransformReport:
        if self.target is None:
            raise ConfigurationError("No target directory set")
        observer = observer or TransformObserver()
        start = time.monotonic()

        self.templates.freeze()
        transformations = self.get_transformations()

        document = self.source
        if document is not None:
            observer.pre_transform(document)
            behaviours = BehaviourCollection(self.behaviours())
            logger.debug("running %d behaviours", len(behaviours))
            document = behaviours.process(document.copy())

        report = TransformReport(transformations=len(transformations))
        for transformation in transformations:
            logger.info(
                "Applying transformation query %r using writer %s",
                transformation.query,
                transformation.writer,
            )
            try:
                artifacts = transformation.execute(document, self.target, self.writers)
            except TransformationError as exc:
                logger.error("%s", exc, exc_info=True)
                report.failures.append(
                    TransformationFailure(
                        query=transformation.query,
                        writer=transformation.writer,
                        artifact=transformation.artifact,
                        error=str(exc),
                    )
                )
                observer.transformation_failed(transformation, exc)
                continue
            report.artifacts.extend(artifacts)
            observer.transformation_applied(transformation, artifacts)

        report.duration = time.monotonic() - start
        if report.partial:
            logger.warning(
                "%d of %d transformations failed", len(report.failures), len(transformations)
            )
        return report
