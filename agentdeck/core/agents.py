from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from agentdeck.core.sandbox import SandboxPolicy


BUILTIN_AGENT_NAME = "general"
BUILTIN_AGENT_PROMPT = "You are a helpful AI assistant. Complete the given task efficiently and accurately."
FALLBACK_SYSTEM_PROMPT = "You are a helpful AI assistant."


class ReasoningEffort(str, Enum):
    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class AgentConfig:
    prompt: str | None = None
    prompt_file: str | None = None
    tools: tuple[str, ...] | None = None
    model: str | None = None
    reasoning_effort: ReasoningEffort | None = None
    permissions: SandboxPolicy | None = None
    source_root: Path | None = None


@dataclass(frozen=True)
class AgentSummary:
    name: str
    description: str
    is_builtin: bool = False


@dataclass(frozen=True)
class AgentTask:
    agent_name: str
    prompt: str
    metadata: dict[str, Any] = field(default_factory=dict)


def builtin_agent() -> AgentConfig:
    return AgentConfig(prompt=BUILTIN_AGENT_PROMPT)
