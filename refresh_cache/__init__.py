#!filepath: refresh_cache/__init__.py

from .utils.logger import Logging, logs, init_logging
from .utils.errors import (
    CacheError,
    CacheConfigError,
    UpdateFuncError,
    CacheKeyError,
    CacheTypeError,
    CacheClosedError,
)
from .config.cache_config import CacheConfig
from .config.app_config import AppConfig
from .core import Cache, CacheState, CancelContext, ErrorSink
from .typed import TypedCache

__version__ = "0.1.0"

__all__ = [
    "logs", "Logging", "init_logging",
    "Cache", "CacheState", "CacheConfig", "AppConfig",
    "CancelContext", "ErrorSink",
    "TypedCache",
    "CacheError", "CacheConfigError", "UpdateFuncError",
    "CacheKeyError", "CacheTypeError", "CacheClosedError",
]
