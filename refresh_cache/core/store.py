# refresh_cache/core/store.py
from __future__ import annotations

import threading
from typing import Any, Dict, List, Tuple


class DataStore:
    """Thread-safe key -> value map; each value is replaced as a whole."""

    def __init__(self) -> None:
        self._data: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Tuple[Any, bool]:
        with self._lock:
            if key in self._data:
                return self._data[key], True
            return None, False

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._data)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
