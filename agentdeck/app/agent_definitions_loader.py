from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from agentdeck.adapters.config.schema import AgentDefinitionConfig
from agentdeck.app.environment import AGENTS_FILE_NAME
from agentdeck.core.agents import AgentConfig
from agentdeck.core.diagnostics import Diagnostic, LoadResult
from agentdeck.core.errors import (
    AgentDefinitionError,
    AgentsFileParseError,
    PromptFileError,
    PromptPathSecurityError,
    UnknownSandboxPolicyError,
)
from agentdeck.shared.path_guard import PromptPathGuard
from agentdeck.shared.sandbox_policy import parse_permissions_override


def parse_agents_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fp:
            return tomllib.load(fp)
    except tomllib.TOMLDecodeError as exc:
        raise AgentsFileParseError(path, str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise AgentsFileParseError(path, "file is not valid UTF-8") from exc


def validate_agent_definition(name: str, payload: Any) -> AgentDefinitionConfig:
    if not isinstance(payload, dict):
        raise AgentDefinitionError(name, "agent entry must be a table")
    try:
        return AgentDefinitionConfig.model_validate(payload)
    except ValidationError as exc:
        reasons = "; ".join(_error_message(error) for error in exc.errors())
        raise AgentDefinitionError(name, reasons) from exc


def read_prompt_file(base_dir: Path, prompt_file: str, guard: PromptPathGuard) -> str:
    safe_path = guard.resolve(base_dir, prompt_file)
    try:
        return safe_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise PromptFileError(safe_path, exc) from exc


def load_agents_from(root: Path, guard: PromptPathGuard) -> LoadResult[AgentConfig]:
    path = root / AGENTS_FILE_NAME
    if not path.is_file():
        return LoadResult()
    logger = logging.getLogger("agentdeck.agents.loader")
    try:
        payload = parse_agents_file(path)
    except AgentsFileParseError as exc:
        logger.warning("ignoring malformed agents file", extra={"path": str(path), "error": str(exc)})
        return LoadResult(diagnostics=(Diagnostic(kind="parse", source=path, message=str(exc)),))
    except OSError as exc:
        logger.warning("cannot read agents file", extra={"path": str(path), "error": str(exc)})
        return LoadResult(diagnostics=(Diagnostic(kind="io", source=path, message=str(exc)),))

    agents: dict[str, AgentConfig] = {}
    diagnostics: list[Diagnostic] = []
    for name in sorted(payload):
        try:
            definition = validate_agent_definition(name, payload[name])
        except AgentDefinitionError as exc:
            logger.warning("dropping invalid agent config", extra={"agent": name, "path": str(path), "error": exc.reason})
            diagnostics.append(Diagnostic(kind="validation", source=path, message=str(exc), name=name))
            continue
        agents[name] = _resolve_definition(name, definition, root, path, guard, diagnostics, logger)
    return LoadResult(items=agents, diagnostics=tuple(diagnostics))


def _resolve_definition(
    name: str,
    definition: AgentDefinitionConfig,
    root: Path,
    source: Path,
    guard: PromptPathGuard,
    diagnostics: list[Diagnostic],
    logger: logging.Logger,
) -> AgentConfig:
    prompt = definition.prompt
    prompt_file = definition.prompt_file
    if prompt_file is not None:
        try:
            prompt = read_prompt_file(root, prompt_file, guard)
            prompt_file = None
        except PromptPathSecurityError as exc:
            logger.warning("rejected agent prompt file", extra={"agent": name, "prompt_file": prompt_file})
            diagnostics.append(Diagnostic(kind="security", source=source, message=str(exc), name=name))
        except PromptFileError as exc:
            logger.warning("cannot read agent prompt file", extra={"agent": name, "error": str(exc)})
            diagnostics.append(Diagnostic(kind="io", source=source, message=str(exc), name=name))

    try:
        permissions = parse_permissions_override(definition.permissions)
    except UnknownSandboxPolicyError as exc:
        logger.warning(
            "invalid permissions override, falling back to inherited permissions",
            extra={"agent": name, "error": str(exc)},
        )
        diagnostics.append(
            Diagnostic(
                kind="validation",
                source=source,
                message=f"invalid permissions override '{definition.permissions}': {exc}",
                name=name,
            )
        )
        permissions = None

    return AgentConfig(
        prompt=prompt,
        prompt_file=prompt_file,
        tools=tuple(definition.tools) if definition.tools is not None else None,
        model=definition.model,
        reasoning_effort=definition.reasoning_effort,
        permissions=permissions,
        source_root=root,
    )


def _error_message(error: Any) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = str(error.get("msg", "invalid value"))
    if location:
        return f"{location}: {message}"
    return message
