# refresh_cache/core/registry.py
from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List, Tuple

UpdateFunc = Callable[[], Any]


class UpdateFuncRegistry:
    """
    key -> update function.

    Guarded by a lock so registration may race with a running refresh
    cycle; a cycle iterates over snapshot(), never the live dict.
    """

    def __init__(self) -> None:
        self._funcs: Dict[str, UpdateFunc] = {}
        self._lock = threading.Lock()

    def add(self, key: str, func: UpdateFunc) -> None:
        if not key:
            raise ValueError("update function key must be a non-empty string")
        if not callable(func):
            raise TypeError(f"update function for {key} is not callable")
        with self._lock:
            self._funcs[key] = func

    def get(self, key: str) -> UpdateFunc:
        with self._lock:
            return self._funcs[key]

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._funcs)

    def snapshot(self) -> List[Tuple[str, UpdateFunc]]:
        with self._lock:
            return list(self._funcs.items())

    def clear(self) -> None:
        with self._lock:
            self._funcs.clear()

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._funcs

    def __len__(self) -> int:
        with self._lock:
            return len(self._funcs)
