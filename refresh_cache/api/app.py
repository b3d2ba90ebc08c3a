# refresh_cache/api/app.py
from __future__ import annotations

from typing import Any

from flask import Flask, jsonify
from pydantic import BaseModel

from refresh_cache.api.decorators import handle_cache_miss
from refresh_cache.examples.topics import MAIN_TOPIC_KEY, TopicCache
from refresh_cache.utils.errors import CacheKeyError


def _to_json(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, (list, tuple)):
        return [_to_json(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_json(v) for k, v in value.items()}
    return value


def create_app(topic_cache: TopicCache) -> Flask:
    """
    Read-only HTTP view over a running topic cache.
    """
    app = Flask(__name__)

    @app.get("/health")
    def health():
        return jsonify({
            "ok": True,
            "cache_state": topic_cache.state.value,
            "pending_errors": len(topic_cache.errors),
        })

    @app.get("/topic")
    @handle_cache_miss
    def get_topic():
        topic = topic_cache.get_data(MAIN_TOPIC_KEY)
        return jsonify(topic.model_dump())

    @app.get("/cache/<key>")
    @handle_cache_miss
    def get_cached(key: str):
        value, ok = topic_cache.get(key)
        if not ok:
            raise CacheKeyError(key)
        return jsonify({"key": key, "value": _to_json(value)})

    return app
