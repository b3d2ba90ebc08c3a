#!filepath: refresh_cache/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

from .cache_config import CacheConfig
from .log_config import LogConfig
from .server_config import ServerConfig


def project_root() -> str:
    """
    Project root, derived from this file:
    refresh_cache/config/app_config.py -> refresh_cache/config -> refresh_cache -> root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


def default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = LogConfig()
    cache: CacheConfig = CacheConfig()
    server: ServerConfig = ServerConfig()

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        Load YAML config, then apply .env / environment overrides.
        - defaults to refresh_cache/config/base.yml
        - independent of the current working directory
        """
        # 1) .env at project root
        load_dotenv(os.path.join(project_root(), ".env"))

        # 2) config file
        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) env overrides
        interval = os.getenv("CACHE_UPDATE_INTERVAL")
        if interval is not None:
            raw.setdefault("cache", {})
            raw["cache"]["update_interval"] = float(interval) if interval.strip() else None

        level = os.getenv("LOG_LEVEL")
        if level:
            raw.setdefault("log", {})
            raw["log"]["level"] = level

        return cls(**raw)
