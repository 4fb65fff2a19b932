from __future__ import annotations

from agentdeck.core.errors import UnknownSandboxPolicyError
from agentdeck.core.sandbox import DangerFullAccess, ReadOnly, SandboxPolicy, WorkspaceWrite

INHERIT = "inherit"

_POLICIES: dict[str, SandboxPolicy] = {
    "read-only": ReadOnly(),
    "readonly": ReadOnly(),
    "danger-full-access": DangerFullAccess(),
    "dangerfullaccess": DangerFullAccess(),
    "workspace-write": WorkspaceWrite(network_access=False),
    "workspacewrite": WorkspaceWrite(network_access=False),
    "workspace-write+network": WorkspaceWrite(network_access=True),
    "workspace-write-network": WorkspaceWrite(network_access=True),
    "workspace-write:network": WorkspaceWrite(network_access=True),
    "workspacewrite+network": WorkspaceWrite(network_access=True),
}


def parse_sandbox_policy(value: str) -> SandboxPolicy:
    normalized = value.strip().lower()
    policy = _POLICIES.get(normalized)
    if policy is None:
        raise UnknownSandboxPolicyError(normalized)
    return policy


def parse_permissions_override(raw: str | None) -> SandboxPolicy | None:
    if raw is None:
        return None
    trimmed = raw.strip()
    if not trimmed or trimmed.lower() == INHERIT:
        return None
    return parse_sandbox_policy(trimmed)
