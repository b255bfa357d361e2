"""Transformer: behaviour chain plus template transformations."""

from docweave.transformer.models import TransformationFailure, TransformReport
from docweave.transformer.observer import TransformObserver
from docweave.transformer.transformer import Transformer

__all__ = [
    "TransformObserver",
    "TransformReport",
    "TransformationFailure",
    "Transformer",
]
