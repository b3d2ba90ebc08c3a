#!filepath: refresh_cache/config/server_config.py
from pydantic import BaseModel


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 4242
