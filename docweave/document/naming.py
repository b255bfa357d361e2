"""Artifact filename derivation."""

from __future__ import annotations

import os
import re

OUTPUT_EXTENSION = ".html"

_SEPARATORS = re.compile(r"[/\\]")


def generate_filename(file: str, extension: str = OUTPUT_EXTENSION) -> str:
    """Convert a project-relative source path to the artifact name used for it.

    Leading/trailing separators and dots are stripped, separators become
    underscores and the extension of the last path component is swapped for
    *extension*: ``src/Foo/Bar.php`` -> ``_src_Foo_Bar.html``. Dots in
    directory names are kept, so ``lib.d/README`` -> ``_lib.d_README.html``.
    """
    *dirs, name = _SEPARATORS.split(file.strip("/\\."))
    stem, _ext = os.path.splitext(name)
    return "_" + "_".join([*dirs, stem]) + extension
