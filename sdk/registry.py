
from __future__ import annotations
from importlib import import_module
class Registry:
    """Maps short names to ``module:attr`` import targets."""
    def __init__(self):
        self._map: dict[str, str] = {}
    def __contains__(self, key: str) -> bool:
        return key in self._map
    def keys(self) -> list[str]:
        return list(self._map)
    def register(self, key: str, target: str) -> None:
        self._map[key] = target
    def target(self, key: str) -> str:
        return self._map.get(key, key)
    def resolve(self, key: str):
        target = self.target(key)
        mod_path, _, obj = target.partition(":")
        mod = import_module(mod_path)
        return getattr(mod, obj) if obj else mod
REGISTRY = Registry()
