"""Structure document model and helpers."""

from docweave.document.document import XML_MARKER, Document, is_inline, parse
from docweave.document.naming import OUTPUT_EXTENSION, generate_filename

__all__ = [
    "Document",
    "OUTPUT_EXTENSION",
    "XML_MARKER",
    "generate_filename",
    "is_inline",
    "parse",
]
