from __future__ import annotations

from refresh_cache.api.app import create_app
from refresh_cache.examples.topics import MAIN_TOPIC_KEY, build_topic_cache


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json["ok"] is True
    assert resp.json["cache_state"] == "one_shot_done"
    assert resp.json["pending_errors"] == 0


def test_get_topic(client):
    resp = client.get("/topic")

    assert resp.status_code == 200
    assert resp.json["name"] == "Census"
    assert resp.json["sub_topics"] == [{"id": 8341, "name": "age"}]


def test_get_cached_key(client):
    resp = client.get(f"/cache/{MAIN_TOPIC_KEY}")

    assert resp.status_code == 200
    assert resp.json["key"] == MAIN_TOPIC_KEY
    assert resp.json["value"]["sub_topics"][0]["name"] == "age"


def test_get_cached_plain_value(client, topic_cache):
    topic_cache.set("counts", {"a": [1, 2]})

    resp = client.get("/cache/counts")

    assert resp.status_code == 200
    assert resp.json["value"] == {"a": [1, 2]}


def test_get_cached_not_found(client):
    resp = client.get("/cache/non_exist")

    assert resp.status_code == 404
    assert resp.json == {"error": "cached data not found", "key": "non_exist"}


def test_topic_not_loaded_yet():
    cache = build_topic_cache(update_interval=1)
    app = create_app(cache)
    app.config["TESTING"] = True

    with app.test_client() as client:
        resp = client.get("/topic")

    assert resp.status_code == 404
    assert resp.json["key"] == MAIN_TOPIC_KEY


def test_topic_after_close_unavailable():
    cache = build_topic_cache(update_interval=1)
    cache.start_and_manage_updates()
    cache.close()
    app = create_app(cache)
    app.config["TESTING"] = True

    with app.test_client() as client:
        resp = client.get("/topic")

    assert resp.status_code == 503
    assert resp.json["key"] == MAIN_TOPIC_KEY
