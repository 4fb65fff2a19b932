from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from agentdeck.app.agent_definitions_loader import load_agents_from, read_prompt_file
from agentdeck.app.environment import ResolverEnvironment
from agentdeck.core.agents import (
    BUILTIN_AGENT_NAME,
    FALLBACK_SYSTEM_PROMPT,
    AgentConfig,
    AgentSummary,
    ReasoningEffort,
    builtin_agent,
)
from agentdeck.core.diagnostics import Diagnostic
from agentdeck.core.errors import UnknownAgentError
from agentdeck.core.sandbox import SandboxPolicy
from agentdeck.shared.layering import merge_layers
from agentdeck.shared.path_guard import PromptPathGuard

FILE_PROMPT_DESCRIPTION = "Agent with file-based prompt"
_DESCRIPTION_PREFIXES = ("You are a ", "You are an ", "You are ")


class AgentRegistry:
    def __init__(
        self,
        agents: dict[str, AgentConfig],
        *,
        agents_dir: Path | None = None,
        guard: PromptPathGuard | None = None,
        diagnostics: Iterable[Diagnostic] = (),
    ) -> None:
        by_name = dict(agents)
        by_name.setdefault(BUILTIN_AGENT_NAME, builtin_agent())
        self._by_name = by_name
        self._agents_dir = agents_dir
        self._guard = guard or PromptPathGuard(None)
        self._diagnostics = tuple(diagnostics)

    @property
    def agents_dir(self) -> Path | None:
        return self._agents_dir

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return self._diagnostics

    def get(self, name: str) -> AgentConfig | None:
        return self._by_name.get(name)

    def all(self) -> list[AgentConfig]:
        return [self._by_name[name] for name in self.names()]

    def names(self) -> list[str]:
        return sorted(self._by_name.keys())

    def system_prompt(self, name: str) -> str:
        config = self._by_name.get(name)
        if config is not None and config.prompt is not None:
            return config.prompt
        builtin = self._by_name.get(BUILTIN_AGENT_NAME)
        if builtin is not None and builtin.prompt is not None:
            return builtin.prompt
        return FALLBACK_SYSTEM_PROMPT

    def summaries(self) -> list[AgentSummary]:
        summaries = []
        for name, config in self._by_name.items():
            if config.prompt is not None:
                description = extract_description(config.prompt)
            else:
                description = FILE_PROMPT_DESCRIPTION
            summaries.append(
                AgentSummary(name=name, description=description, is_builtin=name == BUILTIN_AGENT_NAME)
            )
        summaries.sort(key=lambda summary: (not summary.is_builtin, summary.name))
        return summaries

    def permissions_policy(self, name: str) -> SandboxPolicy | None:
        config = self._by_name.get(name)
        return config.permissions if config is not None else None

    def model_override(self, name: str) -> str | None:
        config = self._by_name.get(name)
        return config.model if config is not None else None

    def reasoning_effort_override(self, name: str) -> ReasoningEffort | None:
        config = self._by_name.get(name)
        return config.reasoning_effort if config is not None else None

    def read_prompt_file(self, name: str) -> str:
        """Return the agent's prompt, reading its prompt file on demand.

        Unlike the bulk load, failures surface to the caller: the guard's
        ``PromptPathSecurityError`` or a ``PromptFileError`` naming the path.
        """
        config = self._by_name.get(name)
        if config is None:
            raise UnknownAgentError(name)
        if config.prompt is not None:
            return config.prompt
        if config.prompt_file is None:
            raise UnknownAgentError(name)
        base_dir = config.source_root or self._agents_dir or Path(".")
        return read_prompt_file(base_dir, config.prompt_file, self._guard)


def build_agent_registry(environment: ResolverEnvironment) -> AgentRegistry:
    logger = logging.getLogger("agentdeck.agents")
    guard = PromptPathGuard(environment.personal_root)
    layers: list[dict[str, AgentConfig]] = []
    diagnostics: list[Diagnostic] = []
    for root in environment.scope_roots():
        result = load_agents_from(root, guard)
        layers.append(result.items)
        diagnostics.extend(result.diagnostics)
    layers.append({BUILTIN_AGENT_NAME: builtin_agent()})
    agents = merge_layers(layers)

    project_root = environment.project_root
    agents_dir = project_root if project_root.exists() else environment.personal_root
    logger.info(
        "agent registry built",
        extra={"agents": sorted(agents), "diagnostics": len(diagnostics)},
    )
    return AgentRegistry(agents, agents_dir=agents_dir, guard=guard, diagnostics=diagnostics)


def extract_description(prompt: str) -> str:
    lines = prompt.splitlines()
    first_line = lines[0] if lines else ""
    period = first_line.find(".")
    description = first_line[: period + 1] if period >= 0 else first_line
    for prefix in _DESCRIPTION_PREFIXES:
        description = description.removeprefix(prefix)
    return description.strip()
