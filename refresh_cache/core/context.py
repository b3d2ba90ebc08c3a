# refresh_cache/core/context.py
from __future__ import annotations

import threading
from typing import Callable, List, Optional


class CancelContext:
    """
    Cancellation token shared between a host and the caches it drives.

    - cancel() is idempotent; callbacks run exactly once, on the cancelling thread
    - a callback added after cancellation runs immediately
    """

    def __init__(self) -> None:
        self._done = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[], None]] = []

    @classmethod
    def background(cls) -> "CancelContext":
        return cls()

    @property
    def cancelled(self) -> bool:
        return self._done.is_set()

    def cancel(self) -> None:
        with self._lock:
            if self._done.is_set():
                return
            self._done.set()
            callbacks, self._callbacks = self._callbacks, []

        for cb in callbacks:
            cb()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._done.wait(timeout)

    def add_done_callback(self, cb: Callable[[], None]) -> None:
        with self._lock:
            if not self._done.is_set():
                self._callbacks.append(cb)
                return
        cb()

    def remove_done_callback(self, cb: Callable[[], None]) -> None:
        with self._lock:
            try:
                self._callbacks.remove(cb)
            except ValueError:
                pass
