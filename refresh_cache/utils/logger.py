#!filepath: refresh_cache/utils/logger.py
import os
import sys
from functools import wraps
from time import perf_counter
from typing import Callable, Optional

from loguru import logger


class Logging:
    """
    Thin wrapper around the global loguru logger.
    ---------------------------------------
    - stderr sink by default, dated file sink when log_dir is given
    - rotation / retention for the file sink
    - function-level logging decorator (catch)
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
    ):
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level

        if self.log_dir:
            os.makedirs(self.log_dir, exist_ok=True)
        self._configure()

    def _configure(self) -> None:
        """
        Replace every loguru sink with the one described by this instance.
        """
        logger.remove()

        fmt = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"
        if self.log_dir:
            logger.add(
                sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
                rotation=self.rotation,
                retention=self.retention,
                level=self.level,
                format=fmt,
                enqueue=True,  # safe across the refresh thread
                backtrace=True,
                diagnose=True,
            )
        else:
            logger.add(sys.stderr, level=self.level, format=fmt)

    # ---------- passthrough ----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    # ---------- decorator ----------
    def catch(
        self,
        msg: str = "Exception occurred",
        log_time: bool = False,
    ) -> Callable:
        """
        Log (and re-raise) any exception escaping the wrapped function.

        Usage:
            @logs.catch("topic refresh failed")
            def refresh(): ...
        """

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):
                start = perf_counter()
                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {func.__name__}: {msg}")
                    raise

                if log_time:
                    cost = perf_counter() - start
                    logger.debug(f"[TIME] {func.__name__} took {cost:.4f}s")
                return result

            return wrapper

        return decorator


def init_logging(log_config) -> Logging:
    """
    Reconfigure the global `logs` from a LogConfig.
    """
    global logs
    logs = Logging(
        log_dir=log_config.dir,
        rotation=log_config.rotation,
        retention=log_config.retention,
        log_level=log_config.level,
    )
    return logs


# default global logs (replaced by init_logging)
logs = Logging()
