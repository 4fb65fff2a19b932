from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Collection, Iterable

from agentdeck.app.environment import ResolverEnvironment
from agentdeck.core.diagnostics import Diagnostic, LoadResult
from agentdeck.core.prompts import PROMPT_FILE_EXTENSION, CustomPrompt
from agentdeck.shared.layering import merge_layers


async def discover_prompts_in(directory: Path, exclude: Collection[str] = ()) -> list[CustomPrompt]:
    result = await asyncio.to_thread(scan_prompt_dir, directory, frozenset(exclude))
    return _sorted_prompts(result.items.values())


async def discover_project_and_personal_prompts(
    project_dir: Path,
    personal_dir: Path | None,
    exclude: Collection[str] = (),
) -> list[CustomPrompt]:
    results = await _scan_scopes(project_dir, personal_dir, frozenset(exclude))
    merged = merge_layers(result.items for result in results)
    return _sorted_prompts(merged.values())


def scan_prompt_dir(directory: Path, exclude: frozenset[str] = frozenset()) -> LoadResult[CustomPrompt]:
    logger = logging.getLogger("agentdeck.prompts")
    try:
        entries = sorted(directory.iterdir())
    except OSError:
        return LoadResult()

    prompts: dict[str, CustomPrompt] = {}
    diagnostics: list[Diagnostic] = []
    for path in entries:
        if path.is_symlink() or not path.is_file():
            continue
        if path.suffix[1:].lower() != PROMPT_FILE_EXTENSION:
            continue
        name = path.stem
        if not name or name in exclude or name in prompts:
            continue
        try:
            content = path.read_bytes().decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("skipping prompt that is not valid UTF-8", extra={"path": str(path)})
            diagnostics.append(Diagnostic(kind="io", source=path, message="prompt is not valid UTF-8", name=name))
            continue
        except OSError as exc:
            logger.debug("skipping unreadable prompt", extra={"path": str(path), "error": str(exc)})
            diagnostics.append(Diagnostic(kind="io", source=path, message=str(exc), name=name))
            continue
        prompts[name] = CustomPrompt(name=name, path=path, content=content)
    return LoadResult(items=prompts, diagnostics=tuple(diagnostics))


class PromptCatalog:
    def __init__(self, prompts: Iterable[CustomPrompt], diagnostics: Iterable[Diagnostic] = ()) -> None:
        ordered = _sorted_prompts(prompts)
        self._prompts = tuple(ordered)
        self._by_name = {prompt.name: prompt for prompt in ordered}
        self._diagnostics = tuple(diagnostics)

    @classmethod
    async def discover(
        cls,
        environment: ResolverEnvironment,
        exclude: Collection[str] = (),
    ) -> "PromptCatalog":
        results = await _scan_scopes(
            environment.project_prompts_dir,
            environment.personal_prompts_dir,
            frozenset(exclude),
        )
        merged = merge_layers(result.items for result in results)
        diagnostics = [diagnostic for result in results for diagnostic in result.diagnostics]
        logging.getLogger("agentdeck.prompts").info(
            "prompt catalog discovered",
            extra={"prompts": sorted(merged), "skipped": len(diagnostics)},
        )
        return cls(merged.values(), diagnostics)

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return self._diagnostics

    def all(self) -> list[CustomPrompt]:
        return list(self._prompts)

    def get(self, name: str) -> CustomPrompt | None:
        return self._by_name.get(name)

    def names(self) -> list[str]:
        return [prompt.name for prompt in self._prompts]

    def __len__(self) -> int:
        return len(self._prompts)


async def _scan_scopes(
    project_dir: Path,
    personal_dir: Path | None,
    exclude: frozenset[str],
) -> list[LoadResult[CustomPrompt]]:
    directories = [project_dir]
    if personal_dir is not None:
        directories.append(personal_dir)
    return list(await asyncio.gather(*(asyncio.to_thread(scan_prompt_dir, item, exclude) for item in directories)))


def _sorted_prompts(prompts: Iterable[CustomPrompt]) -> list[CustomPrompt]:
    return sorted(prompts, key=lambda prompt: (prompt.name, str(prompt.path)))
