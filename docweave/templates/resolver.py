"""TemplateResolver — locates, caches and loads templates by name or path."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from docweave.errors import TemplateDefinitionError, TemplateIOError, TemplateNotFoundError
from docweave.templates.cache import TemplateCache
from docweave.templates.models import TemplateId, TemplateOrigin
from docweave.templates.template import DEFINITION_FILE, Template

logger = logging.getLogger(__name__)

DEFAULT_THEMES_PATH = Path(__file__).resolve().parent.parent / "data" / "themes"
CACHE_DIR = "cache"


def canonical_name(path: str) -> str:
    """Stable template name for a directory path: separators to underscores, lower-case."""
    return re.sub(r"[/\\]", "_", path.rstrip("/\\")).lower()


class TemplateResolver:
    """Turns a template name or directory path into a loaded Template.

    A directory containing ``template.yaml`` is a custom template: it is
    copied into the cache under the themes root, named after its full path
    and also reachable there by its base name.
    Anything else is a theme name, looked up under the themes root and then
    in the cache.
    """

    def __init__(
        self,
        themes_path: str | Path | None = None,
        cache: TemplateCache | None = None,
    ) -> None:
        self.themes_path = Path(themes_path) if themes_path else DEFAULT_THEMES_PATH
        self.cache = cache or TemplateCache(self.themes_path / CACHE_DIR)

    def identify(self, name_or_path: str) -> TemplateId:
        """Compute the identity of a request without copying or parsing anything."""
        stripped = name_or_path.rstrip("/\\")
        if stripped and (Path(stripped) / DEFINITION_FILE).is_file():
            return TemplateId(
                name=canonical_name(stripped),
                origin=TemplateOrigin.path,
                location=stripped,
            )
        return TemplateId(name=stripped, origin=TemplateOrigin.theme, location=stripped)

    def locate(self, template_id: TemplateId) -> Path:
        """Return the directory the template is loaded from."""
        if template_id.origin is TemplateOrigin.path:
            source = Path(template_id.location)
            if not os.access(source / DEFINITION_FILE, os.R_OK):
                raise TemplateIOError(f"Template definition in '{source}' is not readable")
            return self.cache.ensure_cached(source, template_id.name)

        root = self.themes_path.resolve()
        name = template_id.name
        if not name:
            raise TemplateNotFoundError(name, str(root))
        for base in (root, self.cache.root.resolve()):
            # Cache entries resolve to their immutable store copy
            candidate = (base / name).resolve()
            # Theme names must not escape the directory they are looked up in
            if not candidate.is_relative_to(base):
                raise TemplateNotFoundError(name, str(base))
            if (candidate / DEFINITION_FILE).is_file():
                return candidate
        raise TemplateNotFoundError(name, str(root))

    def resolve(self, name_or_path: str) -> Template:
        return self.load(self.identify(name_or_path))

    def load(self, template_id: TemplateId, _chain: tuple[str, ...] = ()) -> Template:
        """Locate and populate a template, following its ``extends`` list."""
        if template_id.name in _chain:
            raise TemplateDefinitionError(
                f"Template inheritance cycle: {' -> '.join(_chain + (template_id.name,))}"
            )

        path = self.locate(template_id)
        definition = path / DEFINITION_FILE
        try:
            text = definition.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise TemplateNotFoundError(template_id.name, str(path)) from e
        except OSError as e:
            raise TemplateIOError(f"Unable to read '{definition}': {e}") from e

        template = Template(template_id, path)
        chain = _chain + (template_id.name,)
        template.populate(text, lambda base: self.load(self.identify(base), chain))
        logger.debug("loaded %r", template)
        return template

    def available(self) -> list[str]:
        """Names of installed themes and cached templates, themes first."""
        names: list[str] = []
        for root in (self.themes_path, self.cache.root):
            if not root.is_dir():
                continue
            for d in sorted(root.iterdir()):
                if d.name.startswith(".") or d.name in names:
                    continue
                if (d / DEFINITION_FILE).is_file():
                    names.append(d.name)
        return names
