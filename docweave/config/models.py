from typing import Literal

from pydantic import BaseModel, Field


class TransformerConfig(BaseModel):
    source: str | None = None
    target: str = "output"
    templates: list[str] = Field(default_factory=lambda: ["default"])
    themes_path: str | None = None
    parse_private: bool = False
    template_conflicts: Literal["skip", "shadow"] = "skip"


class DocweaveConfig(BaseModel):
    transformer: TransformerConfig = Field(default_factory=TransformerConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
