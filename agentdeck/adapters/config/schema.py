from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from agentdeck.core.agents import ReasoningEffort


class RuntimeConfig(BaseModel):
    log_level: str = "INFO"


class AgentDefinitionConfig(BaseModel):
    prompt: str | None = None
    prompt_file: str | None = None
    tools: List[str] | None = None
    model: str | None = None
    reasoning_effort: ReasoningEffort | None = None
    permissions: str | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("model")
    @classmethod
    def _normalize_model(cls, value: str | None) -> str | None:
        if value is None:
            return None
        trimmed = value.strip()
        return trimmed or None

    @field_validator("reasoning_effort", mode="before")
    @classmethod
    def _normalize_reasoning_effort(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @model_validator(mode="after")
    def _validate_prompt_source(self) -> "AgentDefinitionConfig":
        if self.prompt is None and self.prompt_file is None:
            raise ValueError("Agent configuration must have either 'prompt' or 'prompt_file'")
        if self.prompt is not None and self.prompt_file is not None:
            raise ValueError("Agent configuration should have either 'prompt' or 'prompt_file', not both")
        return self


class LoggingConfig(BaseModel):
    logfmt_enabled: bool = True
    log_level: str = "INFO"
    file_enabled: bool = False
    directory: str = "logs"


class PromptsConfig(BaseModel):
    reserved_names: List[str] = Field(default_factory=list)


class Settings(BaseModel):
    runtime: RuntimeConfig = RuntimeConfig()
    logging: LoggingConfig = LoggingConfig()
    prompts: PromptsConfig = PromptsConfig()

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        return cls.model_validate(data)

    @classmethod
    def from_file(cls, path: Path) -> "Settings":
        with path.open("rb") as fp:
            data = tomllib.load(fp)
        return cls.from_dict(data)
