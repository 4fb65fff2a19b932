from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from agentdeck.adapters.config.loader import load_settings
from agentdeck.adapters.config.schema import Settings
from agentdeck.adapters.logging.setup import configure_logging
from agentdeck.app.agent_registry import AgentRegistry, build_agent_registry
from agentdeck.app.environment import ResolverEnvironment
from agentdeck.app.prompt_catalog import PromptCatalog


class AppContainer:
    _settings: Optional[Settings] = None
    _logger: Optional[logging.Logger] = None
    _environment: Optional[ResolverEnvironment] = None
    _agent_registry: Optional[AgentRegistry] = None
    _prompt_catalog: Optional[PromptCatalog] = None

    @classmethod
    def configure(
        cls,
        config_path: Path | None = None,
        environment: ResolverEnvironment | None = None,
    ) -> None:
        cls._settings = load_settings(config_path)
        cls._settings.logging.log_level = cls._settings.runtime.log_level
        cls._logger = configure_logging(cls._settings.logging)
        cls._environment = environment or ResolverEnvironment.from_environ()
        cls._agent_registry = build_agent_registry(cls._environment)
        cls._prompt_catalog = None

    @classmethod
    def get_settings(cls) -> Settings:
        if cls._settings is None:
            raise RuntimeError("container not configured")
        return cls._settings

    @classmethod
    def get_logger(cls) -> logging.Logger:
        if cls._logger is None:
            raise RuntimeError("container not configured")
        return cls._logger

    @classmethod
    def get_environment(cls) -> ResolverEnvironment:
        if cls._environment is None:
            raise RuntimeError("container not configured")
        return cls._environment

    @classmethod
    def get_agent_registry(cls) -> AgentRegistry:
        if cls._agent_registry is None:
            raise RuntimeError("agent registry not configured")
        return cls._agent_registry

    @classmethod
    def get_prompt_catalog(cls) -> PromptCatalog:
        if cls._prompt_catalog is None:
            raise RuntimeError("prompt catalog not initialized")
        return cls._prompt_catalog

    @classmethod
    async def initialize_prompts(cls) -> PromptCatalog:
        environment = cls.get_environment()
        reserved = cls.get_settings().prompts.reserved_names
        cls._prompt_catalog = await PromptCatalog.discover(environment, exclude=reserved)
        return cls._prompt_catalog
