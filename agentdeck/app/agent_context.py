from __future__ import annotations

from typing import Any, Mapping, MutableMapping

from agentdeck.app.agent_registry import AgentRegistry
from agentdeck.core.agents import AgentTask
from agentdeck.core.errors import AgentRecursionError

AGENT_CONTEXT_MARKER = "is_agent"


def can_spawn_agents(metadata: Mapping[str, Any]) -> bool:
    return AGENT_CONTEXT_MARKER not in metadata


def mark_as_agent_context(metadata: MutableMapping[str, Any]) -> None:
    metadata[AGENT_CONTEXT_MARKER] = "true"


def build_agent_task(
    registry: AgentRegistry,
    agent_name: str,
    task: str,
    metadata: Mapping[str, Any] | None = None,
) -> AgentTask:
    """Prepare the prompt for running ``task`` under ``agent_name``.

    The caller's metadata is checked on every call; a context that already
    belongs to an agent cannot start another one. The returned task carries a
    marked copy of the metadata for the nested session.
    """
    context = dict(metadata or {})
    if not can_spawn_agents(context):
        raise AgentRecursionError(f"agent context cannot spawn agent '{agent_name}'")
    system_prompt = registry.system_prompt(agent_name)
    mark_as_agent_context(context)
    return AgentTask(
        agent_name=agent_name,
        prompt=f"{system_prompt}\n\nTask: {task}",
        metadata=context,
    )
