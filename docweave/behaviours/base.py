"""BehaviourCollection — runs ordered behaviours over the structure document."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

from docweave.document import Document
from docweave.errors import BehaviourError

logger = logging.getLogger(__name__)

# A behaviour takes the document produced by its predecessor and returns the
# document for its successor (usually the same object, mutated).
Behaviour = Callable[[Document], Document]


def behaviour_name(behaviour: Behaviour) -> str:
    return getattr(behaviour, "__name__", type(behaviour).__name__)


class BehaviourCollection:
    def __init__(self, behaviours: Iterable[Behaviour]):
        self.behaviours = list(behaviours)

    def process(self, document: Document) -> Document:
        """Apply every behaviour in order. The first failure aborts the chain."""
        for behaviour in self.behaviours:
            name = behaviour_name(behaviour)
            logger.debug("applying behaviour %s", name)
            try:
                result = behaviour(document)
            except BehaviourError:
                raise
            except Exception as exc:
                raise BehaviourError(name, exc) from exc
            if not isinstance(result, Document):
                raise BehaviourError(name, f"returned {type(result).__name__}, expected Document")
            document = result
        return document

    def __iter__(self) -> Iterator[Behaviour]:
        return iter(self.behaviours)

    def __len__(self) -> int:
        return len(self.behaviours)
