"""Writer plugin interface."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from docweave.templates.models import Transformation


@runtime_checkable
class Writer(Protocol):
    """Turns a query result into artifacts under the target directory."""

    def render(
        self,
        nodes: list[ET.Element] | None,
        transformation: Transformation,
        target: Path,
    ) -> list[Path]: ...


def artifact_path(target: Path, artifact: str) -> Path:
    """Join *artifact* onto *target*, refusing anything that escapes it."""
    dest = target / artifact
    if not dest.resolve().is_relative_to(target.resolve()):
        raise ValueError(f"Artifact path escapes target directory: {artifact}")
    return dest
