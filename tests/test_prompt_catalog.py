from __future__ import annotations

from pathlib import Path

import pytest

from agentdeck.app.environment import ResolverEnvironment
from agentdeck.app.prompt_catalog import (
    PromptCatalog,
    discover_project_and_personal_prompts,
    discover_prompts_in,
    scan_prompt_dir,
)


@pytest.mark.asyncio
async def test_discover_prompts_in_missing_dir_is_empty(tmp_path: Path) -> None:
    found = await discover_prompts_in(tmp_path / "nope")

    assert found == []


@pytest.mark.asyncio
async def test_discover_prompts_in_sorts_and_ignores_non_files(tmp_path: Path) -> None:
    (tmp_path / "b.md").write_text("b", encoding="utf-8")
    (tmp_path / "a.md").write_text("a", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("not a prompt", encoding="utf-8")
    (tmp_path / "subdir").mkdir()
    (tmp_path / "subdir" / "nested.md").write_text("nested", encoding="utf-8")

    found = await discover_prompts_in(tmp_path)

    assert [prompt.name for prompt in found] == ["a", "b"]
    assert found[0].content == "a"
    assert found[0].path == tmp_path / "a.md"


@pytest.mark.asyncio
async def test_discover_prompts_in_matches_extension_case_insensitively(tmp_path: Path) -> None:
    (tmp_path / "Upper.MD").write_text("upper", encoding="utf-8")

    found = await discover_prompts_in(tmp_path)

    assert [(prompt.name, prompt.content) for prompt in found] == [("Upper", "upper")]


@pytest.mark.asyncio
async def test_discover_prompts_in_excludes_reserved_names(tmp_path: Path) -> None:
    (tmp_path / "init.md").write_text("ignored", encoding="utf-8")
    (tmp_path / "foo.md").write_text("ok", encoding="utf-8")

    found = await discover_prompts_in(tmp_path, {"init"})

    assert [prompt.name for prompt in found] == ["foo"]


@pytest.mark.asyncio
async def test_discover_prompts_in_skips_non_utf8_files(tmp_path: Path) -> None:
    (tmp_path / "good.md").write_bytes(b"hello")
    (tmp_path / "bad.md").write_bytes(bytes([0xFF, 0xFE, ord("\n")]))

    found = await discover_prompts_in(tmp_path)

    assert [prompt.name for prompt in found] == ["good"]


def test_scan_prompt_dir_records_skipped_files(tmp_path: Path) -> None:
    (tmp_path / "bad.md").write_bytes(b"\xff")

    result = scan_prompt_dir(tmp_path)

    assert result.items == {}
    assert [(diagnostic.kind, diagnostic.name) for diagnostic in result.diagnostics] == [("io", "bad")]


@pytest.mark.asyncio
async def test_project_overrides_personal_and_merges(tmp_path: Path) -> None:
    project_dir = tmp_path / ".codex" / "prompts"
    project_dir.mkdir(parents=True)
    (project_dir / "shared.md").write_text("project", encoding="utf-8")
    (project_dir / "x.md").write_text("x", encoding="utf-8")
    personal_dir = tmp_path / "personal"
    personal_dir.mkdir()
    (personal_dir / "shared.md").write_text("personal", encoding="utf-8")
    (personal_dir / "y.md").write_text("y", encoding="utf-8")

    found = await discover_project_and_personal_prompts(project_dir, personal_dir)

    assert [(prompt.name, prompt.content) for prompt in found] == [
        ("shared", "project"),
        ("x", "x"),
        ("y", "y"),
    ]


@pytest.mark.asyncio
async def test_merge_without_personal_dir_uses_project_only(tmp_path: Path) -> None:
    (tmp_path / "solo.md").write_text("solo", encoding="utf-8")

    found = await discover_project_and_personal_prompts(tmp_path, None)

    assert [prompt.name for prompt in found] == ["solo"]


@pytest.mark.asyncio
async def test_prompt_catalog_discover_reads_both_scopes(tmp_path: Path) -> None:
    env = ResolverEnvironment(cwd=tmp_path / "project", home=tmp_path / "home")
    env.project_prompts_dir.mkdir(parents=True)
    env.personal_prompts_dir.mkdir(parents=True)
    (env.project_prompts_dir / "review.md").write_text("project review", encoding="utf-8")
    (env.project_prompts_dir / "init.md").write_text("reserved", encoding="utf-8")
    (env.personal_prompts_dir / "review.md").write_text("personal review", encoding="utf-8")
    (env.personal_prompts_dir / "draft.md").write_text("draft", encoding="utf-8")
    (env.personal_prompts_dir / "broken.md").write_bytes(b"\xff\xfe")

    catalog = await PromptCatalog.discover(env, exclude={"init"})

    assert catalog.names() == ["draft", "review"]
    assert catalog.get("review").content == "project review"
    assert catalog.get("init") is None
    assert len(catalog) == 2
    assert [diagnostic.name for diagnostic in catalog.diagnostics] == ["broken"]


@pytest.mark.asyncio
async def test_prompt_catalog_without_home_is_project_only(tmp_path: Path) -> None:
    env = ResolverEnvironment(cwd=tmp_path, home=None)

    catalog = await PromptCatalog.discover(env)

    assert catalog.all() == []


@pytest.mark.asyncio
async def test_discover_prompts_in_skips_symlinks(tmp_path: Path) -> None:
    prompts_dir = tmp_path / "prompts"
    prompts_dir.mkdir()
    secret = tmp_path / "secret.txt"
    secret.write_text("secret", encoding="utf-8")
    (prompts_dir / "leak.md").symlink_to(secret)
    (prompts_dir / "real.md").write_text("real", encoding="utf-8")

    found = await discover_prompts_in(prompts_dir)

    assert [prompt.name for prompt in found] == ["real"]
