# refresh_cache/core/cache.py
from __future__ import annotations

import threading
import time
from datetime import timedelta
from enum import Enum
from time import perf_counter
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from refresh_cache import logs
from refresh_cache.config.cache_config import CacheConfig
from refresh_cache.core.context import CancelContext
from refresh_cache.core.registry import UpdateFunc, UpdateFuncRegistry
from refresh_cache.core.sink import ErrorSink
from refresh_cache.core.store import DataStore
from refresh_cache.utils.errors import (
    CacheClosedError,
    CacheConfigError,
    UpdateFuncError,
)


class CacheState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    ONE_SHOT_DONE = "one_shot_done"
    CLOSED = "closed"


class Cache:
    """
    Periodically refreshed in-process key/value cache.

    Usage:
        cache = Cache.new(update_interval=5)
        cache.add_update_func("main_topic", fetch_topic)
        cache.start_and_manage_updates(ctx, errors)
        ...
        cache.close()

    Lifecycle:
      - IDLE          : constructed, nothing run yet
      - RUNNING       : background thread refreshes every interval
      - ONE_SHOT_DONE : no interval, update functions ran once
      - CLOSED        : thread stopped, registered keys reset to None,
                        registry emptied; never restarted

    Reads (get) never wait on a refresh in flight.
    """

    def __init__(self, config: Optional[CacheConfig] = None):
        if config is None:
            config = CacheConfig()
        interval = config.update_interval
        # model_construct() skips validation
        if interval is not None and interval <= timedelta(0):
            err = CacheConfigError("cache update interval duration is less than or equal to 0")
            logs.error(f"[Cache] invalid cache update interval given: {err}")
            raise err

        self.config = config
        self.errors = ErrorSink()

        self._data = DataStore()
        self._funcs = UpdateFuncRegistry()

        self._state = CacheState.IDLE
        self._state_lock = threading.Lock()
        self._stop = threading.Event()
        self._wake = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._starting = False

    @classmethod
    def new(cls, update_interval: Any = None) -> "Cache":
        """
        Build a cache from a raw interval (seconds or timedelta, None = once).
        """
        try:
            config = CacheConfig(update_interval=update_interval)
        except ValidationError as e:
            msg = e.errors()[0]["msg"]
            logs.error(f"[Cache] invalid cache update interval given: {msg}")
            raise CacheConfigError(msg) from e
        return cls(config)

    # ---------------- read / write ----------------

    def get(self, key: str) -> Tuple[Any, bool]:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data.set(key, value)

    def add_update_func(self, key: str, func: UpdateFunc) -> None:
        """
        Register (or replace) the update function for `key`.

        Safe while the refresh thread runs; the new function is used
        from the next cycle on.
        """
        if self._state is CacheState.CLOSED:
            raise CacheClosedError(f"cannot add update function for {key}: cache is closed")
        self._funcs.add(key, func)

    @property
    def update_funcs(self) -> Dict[str, UpdateFunc]:
        return dict(self._funcs.snapshot())

    @property
    def state(self) -> CacheState:
        return self._state

    @property
    def interval(self) -> Optional[float]:
        return self.config.interval_seconds

    @property
    def is_updating(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ---------------- refresh ----------------

    def update_content(self) -> None:
        """
        Run every registered update function once and store the results.

        Stops at the first failing function and raises UpdateFuncError
        naming its key. Keys already refreshed in this cycle keep their
        new values (no rollback).

        Once the cache is stopping, the rest of the cycle is abandoned
        and nothing more is written, including the value of a function
        that called close() itself.
        """
        start = perf_counter()
        funcs = self._funcs.snapshot()

        for key, func in funcs:
            if self._stop.is_set():
                return
            try:
                value = func()
            except Exception as exc:
                raise UpdateFuncError(key, exc) from exc
            if self._stop.is_set():
                logs.debug(f"[Cache] cache stopping, dropped refreshed value for {key}")
                return
            self._data.set(key, value)

        logs.debug(f"[Cache] refreshed {len(funcs)} keys in {perf_counter() - start:.4f}s")

    # ---------------- lifecycle ----------------

    def start_updates(
            self,
            ctx: Optional[CancelContext] = None,
            errors: Optional[ErrorSink] = None,
    ) -> None:
        """
        - no interval : run update_content() once, synchronously
        - interval    : start the refresh thread; first refresh after one
                        full interval

        Failures go to `errors` (defaults to self.errors).
        """
        sink = errors if errors is not None else self.errors

        with self._state_lock:
            if not self._can_start("start_updates"):
                return

            if len(self._funcs) == 0:
                logs.debug("[Cache] no update functions registered, nothing to start")
                return

            if self.interval is not None:
                self._launch(ctx or CancelContext.background(), sink)
                return

            self._state = CacheState.ONE_SHOT_DONE

        try:
            self.update_content()
        except UpdateFuncError as err:
            logs.error(f"[Cache] {err}")
            sink.put(err)

    def start_and_manage_updates(
            self,
            ctx: Optional[CancelContext] = None,
            errors: Optional[ErrorSink] = None,
    ) -> None:
        """
        Load synchronously once, then hand over to the refresh thread.

        A failing initial load is fatal: the error is put on `errors`
        (defaults to self.errors) and raised, no thread is started and
        the cache is closed. Unlike close(), this reset also applies
        without an interval: a one-shot cache whose only load failed
        holds nothing but the partial writes of that failed cycle, so
        its data is reset to None and its registry emptied as well.
        """
        sink = errors if errors is not None else self.errors

        with self._state_lock:
            if not self._can_start("start_and_manage_updates"):
                return
            self._starting = True

        try:
            try:
                self.update_content()
            except UpdateFuncError as err:
                logs.error(f"[Cache] initial load failed, closing cache: {err}")
                sink.put(err)
                self._shutdown()
                raise

            with self._state_lock:
                if self.interval is None:
                    self._state = CacheState.ONE_SHOT_DONE
                elif len(self._funcs) == 0:
                    logs.debug("[Cache] no update functions registered, nothing to start")
                else:
                    self._launch(ctx or CancelContext.background(), sink)
        finally:
            with self._state_lock:
                self._starting = False

    def close(self) -> None:
        """
        Stop the refresh thread, reset every registered key to None and
        empty the registry.

        No-op unless the cache is RUNNING (one-shot caches keep their data).
        Returns promptly even if the thread already exited on cancellation.
        """
        with self._state_lock:
            if self._state is not CacheState.RUNNING:
                logs.debug(f"[Cache] close ignored, cache is {self._state.value}")
                return
            self._state = CacheState.CLOSED
            thread = self._thread

        self._stop.set()
        self._wake.set()
        if thread is not None and thread is not threading.current_thread():
            thread.join()

        self._reset()
        logs.info("[Cache] closed")

    def __enter__(self) -> "Cache":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ---------------- internal ----------------

    def _can_start(self, caller: str) -> bool:
        # caller holds _state_lock
        if self._state is not CacheState.IDLE or self._starting:
            state = "starting" if self._starting else self._state.value
            logs.warning(f"[Cache] {caller} ignored, cache is {state}")
            return False
        return True

    def _launch(self, ctx: CancelContext, sink: ErrorSink) -> None:
        # caller holds _state_lock
        ctx.add_done_callback(self._wake.set)
        self._thread = threading.Thread(
            target=self._run,
            args=(self.interval, ctx, sink),
            name="refresh-cache",
            daemon=True,
        )
        self._state = CacheState.RUNNING
        self._thread.start()
        logs.info(f"[Cache] refresh thread started | interval={self.interval}s")

    def _run(self, interval: float, ctx: CancelContext, sink: ErrorSink) -> None:
        next_tick = time.monotonic() + interval
        try:
            while True:
                timeout = max(0.0, next_tick - time.monotonic())
                if self._wake.wait(timeout):
                    break
                if self._stop.is_set() or ctx.cancelled:
                    break

                try:
                    self.update_content()
                except UpdateFuncError as err:
                    logs.error(f"[Cache] {err}")
                    sink.put(err)

                # drop ticks missed by a slow cycle
                next_tick += interval
                now = time.monotonic()
                if next_tick <= now:
                    next_tick += (int((now - next_tick) // interval) + 1) * interval
        finally:
            ctx.remove_done_callback(self._wake.set)
            reason = "cancelled" if ctx.cancelled else "stopped"
            logs.debug(f"[Cache] refresh thread exited ({reason})")

    def _shutdown(self) -> None:
        with self._state_lock:
            self._state = CacheState.CLOSED
        self._stop.set()
        self._wake.set()
        self._reset()

    def _reset(self) -> None:
        for key in self._funcs.keys():
            self._data.set(key, None)
        self._funcs.clear()
