from __future__ import annotations

from functools import wraps
from typing import Any, Callable

from flask import jsonify

from refresh_cache.utils.errors import CacheKeyError, CacheTypeError


def handle_cache_miss(func: Callable[..., Any]):
    """
    Decorator: map typed-cache read errors to HTTP responses.

    - CacheKeyError  -> 404 {error, key}
    - CacheTypeError -> 503 {error, key} (reset or not loaded yet)
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except CacheKeyError as e:
            return jsonify({
                "error": "cached data not found",
                "key": e.key,
            }), 404
        except CacheTypeError as e:
            return jsonify({
                "error": str(e),
                "key": e.key,
            }), 503

    return wrapper
