"""
Refresh engine.

- store    : thread-safe key -> value map
- registry : key -> update function
- context  : cancellation token shared with the host
- sink     : bounded, non-blocking error queue
- cache    : lifecycle + refresh loop tying them together
"""
from .cache import Cache, CacheState
from .context import CancelContext
from .registry import UpdateFuncRegistry
from .sink import ErrorSink
from .store import DataStore

__all__ = [
    "Cache",
    "CacheState",
    "CancelContext",
    "DataStore",
    "ErrorSink",
    "UpdateFuncRegistry",
]
