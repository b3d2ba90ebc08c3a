#!filepath: refresh_cache/typed.py
from __future__ import annotations

from typing import Any, Callable, Generic, Optional, Tuple, Type, TypeVar

from refresh_cache.config.cache_config import CacheConfig
from refresh_cache.core.cache import Cache, CacheState
from refresh_cache.core.context import CancelContext
from refresh_cache.core.sink import ErrorSink
from refresh_cache.utils.errors import CacheKeyError, CacheTypeError

T = TypeVar("T")


class TypedCache(Generic[T]):
    """
    Typed view over a Cache for one domain object.

    The engine stores opaque values; the type check happens here, at the
    boundary:
      - get_data()        : missing key -> CacheKeyError, wrong type -> CacheTypeError
      - add_update_func() : a produced value of the wrong type fails the cycle
    """

    value_type: Type[T]

    def __init__(self, value_type: Type[T], cache: Cache):
        self.value_type = value_type
        self.cache = cache

    @classmethod
    def new(cls, value_type: Type[T], update_interval: Any = None) -> "TypedCache[T]":
        return cls(value_type, Cache.new(update_interval=update_interval))

    @classmethod
    def from_config(cls, value_type: Type[T], config: CacheConfig) -> "TypedCache[T]":
        return cls(value_type, Cache(config))

    def get_data(self, key: str) -> T:
        value, ok = self.cache.get(key)
        if not ok:
            raise CacheKeyError(key)
        return self._check(key, value)

    def add_update_func(self, key: str, func: Callable[[], T]) -> None:
        def update() -> T:
            return self._check(key, func())

        self.cache.add_update_func(key, update)

    def _check(self, key: str, value: Any) -> T:
        if value is None:
            raise CacheTypeError(f"cached data with key {key} is empty", key=key)
        if not isinstance(value, self.value_type):
            raise CacheTypeError(
                f"cached data with key {key} is {type(value).__name__}, "
                f"not {self.value_type.__name__}",
                key=key,
            )
        return value

    # ---------- delegated ----------
    def get(self, key: str) -> Tuple[Any, bool]:
        return self.cache.get(key)

    def set(self, key: str, value: T) -> None:
        self.cache.set(key, value)

    def update_content(self) -> None:
        self.cache.update_content()

    def start_updates(self, ctx: Optional[CancelContext] = None, errors: Optional[ErrorSink] = None) -> None:
        self.cache.start_updates(ctx, errors)

    def start_and_manage_updates(
            self,
            ctx: Optional[CancelContext] = None,
            errors: Optional[ErrorSink] = None,
    ) -> None:
        self.cache.start_and_manage_updates(ctx, errors)

    def close(self) -> None:
        self.cache.close()

    @property
    def state(self) -> CacheState:
        return self.cache.state

    @property
    def errors(self) -> ErrorSink:
        return self.cache.errors
