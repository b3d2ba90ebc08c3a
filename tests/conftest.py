# tests/conftest.py
from __future__ import annotations

import time
from typing import Callable

import pytest
from loguru import logger

from refresh_cache import Cache, CacheConfig


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture
def captured_logs():
    """
    Collect loguru messages emitted during the test.
    """
    captured: list[str] = []
    sink_id = logger.add(lambda msg: captured.append(str(msg)), level="DEBUG")
    yield captured
    logger.remove(sink_id)


@pytest.fixture
def make_test_cache():
    """
    Factory fixture for a Cache seeded with four keys.

    Each update function flips its value on the first refresh and settles
    on a third value afterwards:
        string : test -> test2 -> test3
        int    : 1    -> 2     -> 3
        bool   : False -> True -> False (then toggles)
        float  : 1.1  -> 2.2   -> 3.3
    """
    caches: list[Cache] = []

    def _make(update_interval=None) -> Cache:
        cache = Cache(CacheConfig(update_interval=update_interval))

        cache.set("string", "test")
        cache.set("int", 1)
        cache.set("bool", False)
        cache.set("float", 1.1)

        def _step(key, first, second, third):
            def update():
                val, ok = cache.get(key)
                if ok and val == first and type(val) is type(first):
                    return second
                return third
            return update

        cache.add_update_func("string", _step("string", "test", "test2", "test3"))
        cache.add_update_func("int", _step("int", 1, 2, 3))
        cache.add_update_func("bool", _step("bool", False, True, False))
        cache.add_update_func("float", _step("float", 1.1, 2.2, 3.3))

        caches.append(cache)
        return cache

    yield _make

    # stop any refresh thread left behind by a failing test
    for cache in caches:
        cache.close()


def wait_until(predicate: Callable[[], bool], timeout: float = 2.0, step: float = 0.005) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(step)
    return predicate()


@pytest.fixture
def until():
    return wait_until
