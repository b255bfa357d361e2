"""Template cache: custom template directories installed under the themes root.

Layout::

    <root>/.store/<digest>/   immutable copy of a template, named by content hash
    <root>/<name>             symlink to the store copy installed under <name>

A template is copied into the store once per distinct content. Installing it
under a name swaps that name's symlink with ``os.replace``, so a concurrent
reader sees either the previous copy or the new one, and a path handed out
earlier keeps pointing at the copy it was loaded from.
"""

from __future__ import annotations

import hashlib
import logging
import os
import shutil
import tempfile
import uuid
from pathlib import Path

from docweave.errors import TemplateIOError

logger = logging.getLogger(__name__)

STORE_DIR = ".store"


def copy_recursive(src: Path, dst: Path) -> None:
    """Copy a file or directory tree, creating missing destination directories.

    Raises TemplateIOError when *src* is missing or unreadable, or *dst*
    cannot be created.
    """
    src = Path(src)
    dst = Path(dst)
    if not src.exists():
        raise TemplateIOError(f"Unable to locate path '{src}'")
    try:
        if src.is_file():
            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dst)
        else:
            shutil.copytree(src, dst, dirs_exist_ok=True)
    except OSError as e:
        raise TemplateIOError(f"Unable to copy '{src}' to '{dst}': {e}") from e


def tree_digest(path: Path) -> str:
    """SHA-256 over the relative names and contents of every file below *path*.

    Truncated to the first 16 hex characters.
    """
    path = Path(path)
    if not path.exists():
        raise TemplateIOError(f"Unable to locate path '{path}'")
    digest = hashlib.sha256()
    try:
        files = [path] if path.is_file() else sorted(p for p in path.rglob("*") if p.is_file())
        for f in files:
            digest.update(f.relative_to(path).as_posix().encode())
            digest.update(b"\0")
            digest.update(f.read_bytes())
            digest.update(b"\0")
    except OSError as e:
        raise TemplateIOError(f"Unable to read '{path}': {e}") from e
    return digest.hexdigest()[:16]


class TemplateCache:
    """Name-addressed cache of template directories backed by a content store."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    @property
    def store(self) -> Path:
        return self.root / STORE_DIR

    def ensure_cached(self, source: str | Path, name: str | None = None) -> Path:
        """Install *source* under its base name and, when given, under *name*.

        Returns the store directory holding the copy. A source that already
        lives inside the cache is returned unchanged.
        """
        source = Path(source).resolve()
        root = self.root.resolve()
        if source.is_relative_to(root):
            return source

        digest = tree_digest(source)
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise TemplateIOError(f"Unable to create cache directory '{root}': {e}") from e

        stored = self._store(source, root / STORE_DIR / digest)
        names = list(dict.fromkeys(n for n in (name, source.name) if n not in ("", ".", "..")))
        for entry in names:
            self._link(root / entry, stored)

        logger.info("cached template %s as %s (%s)", source, ", ".join(names), digest)
        return stored

    def _store(self, source: Path, dest: Path) -> Path:
        if dest.is_dir():
            logger.debug("template content %s already stored", dest.name)
            return dest
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            staging = Path(tempfile.mkdtemp(prefix=f".{dest.name}.", dir=dest.parent))
        except OSError as e:
            raise TemplateIOError(f"Unable to create cache directory '{dest.parent}': {e}") from e

        try:
            fresh = staging / "template"
            copy_recursive(source, fresh)
            try:
                os.rename(fresh, dest)
            except OSError as e:
                # Another process stored the same content first
                if not dest.is_dir():
                    raise TemplateIOError(f"Unable to store template in '{dest}': {e}") from e
        finally:
            shutil.rmtree(staging, ignore_errors=True)
        return dest

    def _link(self, entry: Path, target: Path) -> None:
        """Point *entry* at *target*, replacing the previous link in one step."""
        if entry.is_symlink() and entry.resolve() == target:
            return
        tmp = entry.with_name(f".{entry.name}.{uuid.uuid4().hex[:8]}")
        try:
            os.symlink(os.path.relpath(target, entry.parent), tmp, target_is_directory=True)
            os.replace(tmp, entry)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise TemplateIOError(f"Unable to install template as '{entry}': {e}") from e
        logger.debug("cache entry %s -> %s", entry.name, target.name)
