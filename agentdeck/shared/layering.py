from __future__ import annotations

from typing import Iterable, Mapping, TypeVar

T = TypeVar("T")


def merge_layers(layers: Iterable[Mapping[str, T]]) -> dict[str, T]:
    """Merge named resources so the first layer defining a name wins.

    Later layers only fill names that no earlier layer provided. Callers pass
    layers in precedence order (project, personal, built-in defaults).
    """
    merged: dict[str, T] = {}
    for layer in layers:
        for name in sorted(layer):
            merged.setdefault(name, layer[name])
    return merged
