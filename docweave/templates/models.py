"""Pydantic models for template definitions and transformations."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docweave.errors import TransformationError

if TYPE_CHECKING:
    from docweave.document import Document
    from docweave.writers import WriterRegistry

logger = logging.getLogger(__name__)


class TemplateOrigin(str, Enum):
    """Where a template was found."""

    theme = "theme"
    path = "path"


class TemplateId(BaseModel):
    """Resolved identity of a template, computed once when it is requested.

    ``name`` is the key inside a TemplateSet. Themes keep their name; templates
    given as a directory path get the path with separators replaced by
    underscores, lower-cased.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    origin: TemplateOrigin
    location: str = Field(description="Name or path exactly as requested")


class Transformation(BaseModel):
    """A single (query, writer, parameters) step of a template."""

    model_config = ConfigDict(frozen=True)

    query: str = ""
    writer: str
    source: str = ""
    artifact: str = ""
    parameters: dict[str, str] = Field(default_factory=dict)
    template_path: Path | None = Field(
        default=None, description="Directory of the template that declared this step"
    )

    @field_validator("parameters", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {str(k): "" if v is None else str(v) for k, v in value.items()}
        return value

    @property
    def source_path(self) -> Path | None:
        if not self.source:
            return None
        base = self.template_path or Path(".")
        return base / self.source

    def describe(self) -> str:
        return f"transformation {self.query!r} using writer {self.writer!r}"

    def evaluate(self, document: Document | None) -> list[ET.Element] | None:
        """Run the query. No document or no query yields None (static steps)."""
        if document is None or not self.query:
            return None
        return document.query(self.query)

    def execute(
        self,
        document: Document | None,
        target: Path,
        writers: WriterRegistry,
    ) -> list[Path]:
        """Query the document and hand the result to the writer.

        Any failure is raised as a TransformationError bound to this step.
        """
        try:
            writer = writers.get(self.writer)
            nodes = self.evaluate(document)
            return writer.render(nodes, self, target)
        except TransformationError as exc:
            if exc.transformation is self:
                raise
            raise TransformationError(self, exc) from exc
        except Exception as exc:
            raise TransformationError(self, exc) from exc


class TemplateDefinition(BaseModel):
    """Contents of a ``template.yaml`` file."""

    name: str | None = None
    version: str | None = None
    author: str | None = None
    description: str | None = None
    extends: list[str] = Field(default_factory=list)
    transformations: list[Transformation] = Field(default_factory=list)

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_str(cls, value: Any) -> Any:
        # `version: 1.0` arrives from YAML as a float
        if isinstance(value, (int, float)):
            return str(value)
        return value

    @field_validator("extends", mode="before")
    @classmethod
    def _single_base(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value
