# refresh_cache/utils/errors.py
from typing import Optional


class CacheError(RuntimeError):
    """
    Base class for every error raised by the refresh cache.
    """


class CacheConfigError(CacheError, ValueError):
    """
    Raised at construction for an invalid cache config
    (e.g. update interval <= 0). No cache is created.
    """


class UpdateFuncError(CacheError):
    """
    A registered update function failed during a refresh cycle.

    Writes applied earlier in the same cycle are kept.
    """

    def __init__(self, key: str, cause: BaseException):
        self.key = key
        self.cause = cause
        super().__init__(f"failed to update cache for {key}. error: {cause}")


class CacheKeyError(CacheError, KeyError):
    """
    Typed read of a key that was never written.
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"cached data with key {key} not found")

    def __str__(self) -> str:
        # KeyError quotes its argument otherwise
        return self.args[0]


class CacheTypeError(CacheError, TypeError):
    """
    Stored (or produced) value is not of the type the typed cache expects.
    """

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)


class CacheClosedError(CacheError):
    """
    Registering update functions on a closed cache.
    """
