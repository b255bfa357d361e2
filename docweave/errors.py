"""Exception hierarchy for the transformation pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docweave.templates.models import Transformation


class DocweaveError(Exception):
    """Base class for every error raised by docweave."""


class ConfigurationError(DocweaveError):
    """Raised when the transformer is given an unusable target or source."""


class MalformedSourceError(ConfigurationError):
    """Raised when the structure document cannot be parsed."""


class TemplateError(DocweaveError):
    """Base class for template resolution failures."""


class TemplateNotFoundError(TemplateError):
    """Raised when no template definition exists for a name or path."""

    def __init__(self, name: str, location: str | None = None):
        self.name = name
        self.location = location
        msg = f"Template '{name}' could not be found"
        if location:
            msg += f" (looked in {location})"
        super().__init__(msg)


class TemplateIOError(TemplateError, OSError):
    """Raised when template files cannot be read, copied or cached."""


class TemplateDefinitionError(TemplateError):
    """Raised when a template definition file is invalid."""


class BehaviourError(DocweaveError):
    """Wraps a failure raised while a behaviour mutated the document."""

    def __init__(self, behaviour: str, cause: Exception | str) -> None:
        self.behaviour = behaviour
        super().__init__(f"Behaviour {behaviour} failed: {cause}")
        if isinstance(cause, Exception):
            self.__cause__ = cause


class TransformationError(DocweaveError):
    """Wraps a query or writer failure for a single transformation."""

    def __init__(self, transformation: Transformation | None, cause: Exception | str) -> None:
        self.transformation = transformation
        label = transformation.describe() if transformation is not None else "transformation"
        super().__init__(f"{label} failed: {cause}")
        if isinstance(cause, Exception):
            self.__cause__ = cause


class WriterNotFoundError(TransformationError):
    """Raised when a transformation names a writer that is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(None, f"No writer registered with name '{name}'")
