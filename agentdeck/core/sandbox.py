from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ReadOnly:
    pass


@dataclass(frozen=True)
class WorkspaceWrite:
    network_access: bool = False


@dataclass(frozen=True)
class DangerFullAccess:
    pass


SandboxPolicy = Union[ReadOnly, WorkspaceWrite, DangerFullAccess]


def describe_sandbox_policy(policy: SandboxPolicy) -> str:
    if isinstance(policy, ReadOnly):
        return "read-only"
    if isinstance(policy, DangerFullAccess):
        return "danger-full-access"
    if policy.network_access:
        return "workspace-write+network"
    return "workspace-write"
