# refresh_cache/core/sink.py
from __future__ import annotations

import queue
import threading
from typing import List, Optional

from refresh_cache import logs

DEFAULT_CAPACITY = 16


class ErrorSink:
    """
    Bounded error queue owned by the host.

    put() never blocks: once the queue is full new errors are dropped
    (and counted), so an undrained sink cannot stall the refresh loop.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError("error sink capacity must be greater than 0")
        self.capacity = capacity
        self.dropped = 0
        self._dropped_lock = threading.Lock()
        self._queue: "queue.Queue[BaseException]" = queue.Queue(maxsize=capacity)

    def put(self, err: BaseException) -> bool:
        try:
            self._queue.put_nowait(err)
        except queue.Full:
            with self._dropped_lock:
                self.dropped += 1
            logs.warning(f"[ErrorSink] full (capacity={self.capacity}), dropped: {err}")
            return False
        return True

    def get(self, timeout: Optional[float] = None) -> BaseException:
        """
        Blocking read; raises queue.Empty on timeout.
        """
        return self._queue.get(timeout=timeout)

    def get_nowait(self) -> BaseException:
        return self._queue.get_nowait()

    def drain(self) -> List[BaseException]:
        out: List[BaseException] = []
        while True:
            try:
                out.append(self._queue.get_nowait())
            except queue.Empty:
                return out

    def empty(self) -> bool:
        return self._queue.empty()

    def __len__(self) -> int:
        return self._queue.qsize()
