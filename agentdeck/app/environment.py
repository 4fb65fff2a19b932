from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping

SCOPE_DIR_NAME = ".codex"
AGENTS_FILE_NAME = "agents.toml"
PROMPTS_DIR_NAME = "prompts"
HOME_ENV_VARS = ("HOME", "USERPROFILE")


@dataclass(frozen=True)
class ResolverEnvironment:
    cwd: Path
    home: Path | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None, cwd: Path | None = None) -> "ResolverEnvironment":
        env = os.environ if environ is None else environ
        home: Path | None = None
        for key in HOME_ENV_VARS:
            value = env.get(key, "").strip()
            if value:
                home = Path(value)
                break
        return cls(cwd=cwd or Path.cwd(), home=home)

    @property
    def project_root(self) -> Path:
        return self.cwd / SCOPE_DIR_NAME

    @property
    def personal_root(self) -> Path | None:
        if self.home is None:
            return None
        return self.home / SCOPE_DIR_NAME

    @property
    def project_prompts_dir(self) -> Path:
        return self.project_root / PROMPTS_DIR_NAME

    @property
    def personal_prompts_dir(self) -> Path | None:
        if self.personal_root is None:
            return None
        return self.personal_root / PROMPTS_DIR_NAME

    def scope_roots(self) -> list[Path]:
        roots = [self.project_root]
        if self.personal_root is not None:
            roots.append(self.personal_root)
        return roots
