# refresh_cache/examples/topics.py
from __future__ import annotations

import itertools
from typing import Callable, List, Optional

from pydantic import BaseModel, Field

from refresh_cache.core.cache import Cache
from refresh_cache.typed import TypedCache

MAIN_TOPIC_KEY = "main_topic"


class SubTopicItem(BaseModel):
    id: int
    name: str


class TopicItem(BaseModel):
    id: int
    name: str
    sub_topics: List[SubTopicItem] = Field(default_factory=list)


class TopicCache(TypedCache[TopicItem]):
    """Cache of TopicItem, refreshed by update_topic() style producers."""

    def __init__(self, cache: Cache):
        super().__init__(TopicItem, cache)

    @classmethod
    def new(cls, update_interval=None) -> "TopicCache":
        return cls(Cache.new(update_interval=update_interval))


# census subtopics served in turn by the mock topic API
_SUB_TOPICS = (
    SubTopicItem(id=8341, name="age"),
    SubTopicItem(id=2223, name="Migration"),
    SubTopicItem(id=7845, name="Sex"),
)


def update_topic(start_id: int = 1, name: str = "Census") -> Callable[[], TopicItem]:
    """
    Mock topic API client: every call returns the topic with a fresh id
    and the next subtopic in rotation.
    """
    ids = itertools.count(start_id + 1)
    subs = itertools.cycle(_SUB_TOPICS)

    def fetch() -> TopicItem:
        return TopicItem(id=next(ids), name=name, sub_topics=[next(subs)])

    return fetch


def build_topic_cache(update_interval=None, fetch: Optional[Callable[[], TopicItem]] = None) -> TopicCache:
    topic_cache = TopicCache.new(update_interval=update_interval)
    topic_cache.add_update_func(MAIN_TOPIC_KEY, fetch or update_topic())
    return topic_cache
