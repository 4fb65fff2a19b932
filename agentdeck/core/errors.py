from __future__ import annotations

from pathlib import Path


class AgentDefinitionError(ValueError):
    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"invalid agent config for '{name}': {reason}")
        self.name = name
        self.reason = reason


class AgentsFileParseError(ValueError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"cannot parse agents file '{path}': {reason}")
        self.path = path


class PromptPathSecurityError(PermissionError):
    MESSAGE = "Security error: Prompt file must be within project .codex or ~/.codex directory"

    def __init__(self, requested: str) -> None:
        super().__init__(f"{self.MESSAGE} (requested: {requested})")
        self.requested = requested


class PromptFileError(OSError):
    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Cannot read prompt file '{path}': {cause}")
        self.path = path
        self.cause = cause


class UnknownSandboxPolicyError(ValueError):
    def __init__(self, value: str) -> None:
        super().__init__(f"unknown permissions value '{value}'")
        self.value = value


class UnknownAgentError(KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown agent '{self.name}'"


class AgentRecursionError(RuntimeError):
    pass
