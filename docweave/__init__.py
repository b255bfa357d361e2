"""Docweave - template-driven transformation of code structure documents into documentation."""

from docweave.behaviours import BehaviourCollection, build_behaviours
from docweave.config import DocweaveConfig, load_config
from docweave.document import Document, generate_filename
from docweave.templates import Template, TemplateResolver, TemplateSet, Transformation
from docweave.transformer import TransformObserver, TransformReport, Transformer
from docweave.writers import WriterRegistry

__version__ = "0.1.0"

__all__ = [
    "BehaviourCollection",
    "Document",
    "DocweaveConfig",
    "Template",
    "TemplateResolver",
    "TemplateSet",
    "TransformObserver",
    "TransformReport",
    "Transformation",
    "Transformer",
    "WriterRegistry",
    "build_behaviours",
    "generate_filename",
    "load_config",
]
