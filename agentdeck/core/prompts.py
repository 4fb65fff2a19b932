from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


PROMPT_FILE_EXTENSION = "md"


@dataclass(frozen=True)
class CustomPrompt:
    name: str
    path: Path
    content: str
