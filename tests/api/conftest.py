from __future__ import annotations

import pytest

from refresh_cache.api.app import create_app
from refresh_cache.examples.topics import build_topic_cache


@pytest.fixture
def topic_cache():
    """
    One-shot topic cache, loaded before the first request.
    """
    cache = build_topic_cache(update_interval=None)
    cache.start_and_manage_updates()
    yield cache
    cache.close()


@pytest.fixture
def client(topic_cache):
    """
    Flask test client (no real server).
    """
    app = create_app(topic_cache)
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client
