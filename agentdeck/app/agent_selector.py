from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from agentdeck.core.agents import AgentSummary

QUERY_PREFIX = "agent"


@dataclass(frozen=True)
class AgentMatch:
    name: str
    description: str
    match_indices: tuple[int, ...] | None = None


def filter_agents(query: str, summaries: Sequence[AgentSummary]) -> list[AgentMatch]:
    lowered = query.lower()
    needle = ""
    if lowered.startswith(QUERY_PREFIX):
        needle = lowered[len(QUERY_PREFIX) :].lstrip(": ")

    if not needle:
        matches = [AgentMatch(name=item.name, description=item.description) for item in summaries]
    else:
        matches = [
            AgentMatch(
                name=item.name,
                description=item.description,
                match_indices=highlight_indices(item.name, needle),
            )
            for item in summaries
            if needle in item.name.lower()
        ]
    matches.sort(key=lambda match: match.name)
    return matches


def highlight_indices(name: str, needle: str) -> tuple[int, ...] | None:
    if not needle:
        return None
    indices = tuple(index for index, character in enumerate(name.lower()) if character in needle)
    return indices or None
