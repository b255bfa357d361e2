"""Hooks a caller can pass to Transformer.execute()."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docweave.document import Document
    from docweave.errors import TransformationError
    from docweave.templates.models import Transformation


class TransformObserver:
    """No-op base; override the hooks you need."""

    def pre_transform(self, document: Document) -> None:
        """Called with the source document before behaviours run."""

    def transformation_applied(self, transformation: Transformation, artifacts: list[Path]) -> None:
        pass

    def transformation_failed(self, transformation: Transformation, error: TransformationError) -> None:
        pass
