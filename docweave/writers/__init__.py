"""Writers: render transformation results to artifacts on disk."""

from docweave.writers.base import Writer, artifact_path
from docweave.writers.registry import WriterRegistry

__all__ = [
    "Writer",
    "WriterRegistry",
    "artifact_path",
]
