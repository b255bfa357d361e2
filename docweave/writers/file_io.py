"""Copies static template assets (stylesheets, images, scripts) into the target."""

from __future__ import annotations

import logging
import shutil
import xml.etree.ElementTree as ET
from pathlib import Path

from docweave.templates.models import Transformation
from docweave.writers.base import artifact_path

logger = logging.getLogger(__name__)


class FileIoWriter:
    def render(
        self,
        nodes: list[ET.Element] | None,
        transformation: Transformation,
        target: Path,
    ) -> list[Path]:
        source = transformation.source_path
        if source is None:
            raise ValueError("file_io writer requires a source")

        dest = artifact_path(target, transformation.artifact or source.name)
        if source.is_dir():
            shutil.copytree(source, dest, dirs_exist_ok=True)
        elif source.is_file():
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, dest)
        else:
            raise FileNotFoundError(f"Source not found: {source}")

        logger.debug("copied %s to %s", source, dest)
        return [dest]
