from __future__ import annotations

from pathlib import Path

from agentdeck.core.errors import PromptPathSecurityError


class PromptPathGuard:
    """Keeps prompt file references inside the trusted scope roots.

    A reference is accepted only when its real location (symlinks and ``..``
    resolved against the filesystem) is the scope root passed to ``resolve``
    or the personal root, or lies beneath one of them. Anything that cannot be
    canonicalized is rejected.
    """

    def __init__(self, personal_root: Path | None) -> None:
        self._personal_root = personal_root

    @property
    def personal_root(self) -> Path | None:
        return self._personal_root

    def resolve(self, base_dir: Path, requested: str) -> Path:
        requested_path = Path(requested)
        candidate = requested_path if requested_path.is_absolute() else base_dir / requested_path
        try:
            canonical = candidate.resolve(strict=True)
        except (OSError, RuntimeError, ValueError) as exc:
            raise PromptPathSecurityError(requested) from exc

        for root in self._trusted_roots(base_dir):
            if canonical.is_relative_to(root):
                return canonical
        raise PromptPathSecurityError(requested)

    def is_allowed(self, base_dir: Path, requested: str) -> bool:
        try:
            self.resolve(base_dir, requested)
        except PromptPathSecurityError:
            return False
        return True

    def _trusted_roots(self, base_dir: Path) -> list[Path]:
        roots = [_canonical_or_literal(base_dir)]
        if self._personal_root is not None:
            roots.append(_canonical_or_literal(self._personal_root))
        return roots


def _canonical_or_literal(path: Path) -> Path:
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        return path
