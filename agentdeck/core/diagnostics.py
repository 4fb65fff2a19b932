from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Generic, Literal, TypeVar

DiagnosticKind = Literal["validation", "security", "parse", "io"]

T = TypeVar("T")


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    source: Path
    message: str
    name: str | None = None


@dataclass(frozen=True)
class LoadResult(Generic[T]):
    """Items that loaded cleanly plus one diagnostic per skipped file or entry."""

    items: dict[str, T] = field(default_factory=dict)
    diagnostics: tuple[Diagnostic, ...] = ()
