from pathlib import Path

from pydantic import BaseModel, Field


class TransformationFailure(BaseModel):
    query: str
    writer: str
    artifact: str = ""
    error: str


class TransformReport(BaseModel):
    """Outcome of a single transformer run."""

    artifacts: list[Path] = Field(default_factory=list)
    failures: list[TransformationFailure] = Field(default_factory=list)
    transformations: int = 0
    duration: float = 0.0

    @property
    def partial(self) -> bool:
        """True when at least one transformation failed."""
        return bool(self.failures)
