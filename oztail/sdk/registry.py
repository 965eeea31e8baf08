from __future__ import annotations
from importlib import import_module
from typing import Dict, Iterable, Tuple

from .config import SDK_CONFIG


class Registry:
    """Map plugin keys (``source.http``) to ``module:Class`` targets."""

    def __init__(self, entries: Iterable[Tuple[str, str]] = ()):
        self._map: Dict[str, str] = dict(entries)

    def register(self, key: str, target: str) -> None:
        self._map[key] = target

    def keys(self) -> list[str]:
        return sorted(self._map)

    def target(self, key: str) -> str:
        try:
            return self._map[key]
        except KeyError:
            raise KeyError(f"Unknown plugin {key!r}; known: {', '.join(self.keys())}") from None

    def create(self, key: str, *args, **kwargs):
        mod_path, _, obj = self.target(key).partition(":")
        mod = import_module(mod_path)
        cls = getattr(mod, obj) if obj else mod
        return cls(*args, **kwargs)


REGISTRY = Registry(SDK_CONFIG.plugins.items())
