from __future__ import annotations
from typing import Dict, Callable, Any, List

_REGISTRY: Dict[str, Callable[..., Any]] = {}

def register(key: str):
    def _decorator(fn: Callable[..., Any]):
        _REGISTRY[key.upper()] = fn
        return fn
    return _decorator

def get(key: str) -> Callable[..., Any]:
    if key.upper() not in _REGISTRY:
        raise KeyError(f"No menu command registered under '{key}'")
    return _REGISTRY[key.upper()]

def keys() -> List[str]:
    return list(_REGISTRY)
