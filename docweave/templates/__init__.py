"""Templates: definitions, resolution, caching and ordered aggregation."""

from docweave.templates.cache import STORE_DIR, TemplateCache, copy_recursive, tree_digest
from docweave.templates.models import (
    TemplateDefinition,
    TemplateId,
    TemplateOrigin,
    Transformation,
)
from docweave.templates.resolver import (
    CACHE_DIR,
    DEFAULT_THEMES_PATH,
    TemplateResolver,
    canonical_name,
)
from docweave.templates.template import (
    DEFINITION_FILE,
    Template,
    merge_transformations,
    parse_definition,
)
from docweave.templates.template_set import DuplicatePolicy, TemplateSet

__all__ = [
    "CACHE_DIR",
    "DEFAULT_THEMES_PATH",
    "DEFINITION_FILE",
    "DuplicatePolicy",
    "STORE_DIR",
    "Template",
    "TemplateCache",
    "TemplateDefinition",
    "TemplateId",
    "TemplateOrigin",
    "TemplateResolver",
    "TemplateSet",
    "Transformation",
    "canonical_name",
    "copy_recursive",
    "merge_transformations",
    "parse_definition",
    "tree_digest",
]
