"""Writer lookup: built-in writers plus entry point discovery."""

from __future__ import annotations

import importlib.metadata
import logging

from docweave.errors import WriterNotFoundError
from docweave.writers.base import Writer

logger = logging.getLogger(__name__)


class WriterRegistry:
    """Resolves the writer named by a transformation to a writer instance."""

    # Entry point group for third-party writers
    GROUP = "docweave.writers"

    # Built-in writers (lazy import paths)
    BUILTINS = {
        "file_io": ("docweave.writers.file_io", "FileIoWriter"),
        "jinja": ("docweave.writers.jinja", "JinjaWriter"),
        "xml": ("docweave.writers.xml", "XmlWriter"),
    }

    def __init__(self, writers: dict[str, Writer] | None = None) -> None:
        self._instances: dict[str, Writer] = dict(writers or {})

    def register(self, name: str, writer: Writer) -> None:
        """Register a writer instance, replacing any writer with the same name."""
        self._instances[name] = writer

    def discover(self) -> list[str]:
        """Names of every writer available, built-ins first."""
        names = list(self._instances)
        names += [n for n in self.BUILTINS if n not in names]
        for ep in importlib.metadata.entry_points(group=self.GROUP):
            if ep.name not in names:
                names.append(ep.name)
        return names

    def _load_builtin(self, name: str) -> type | None:
        if name not in self.BUILTINS:
            return None
        module_path, class_name = self.BUILTINS[name]
        module = __import__(module_path, fromlist=[class_name])
        return getattr(module, class_name)

    def _load_from_entry_point(self, name: str) -> type | None:
        for ep in importlib.metadata.entry_points(group=self.GROUP):
            if ep.name == name:
                return ep.load()
        return None

    def get(self, name: str) -> Writer:
        writer = self._instances.get(name)
        if writer is not None:
            return writer

        writer_cls = self._load_builtin(name) or self._load_from_entry_point(name)
        if writer_cls is None:
            raise WriterNotFoundError(name)
        writer = writer_cls()
        self._instances[name] = writer
        logger.debug("loaded writer %s (%s)", name, writer_cls.__name__)
        return writer
