"""Tests for lesson plan caching."""

import json

import pytest
import redis

from coachlab.config.settings import settings
from coachlab.lessons.cache import CACHE_KEY_PREFIX, InMemoryLessonCache, RedisLessonCache, build_cache_key
from coachlab.lessons.schemas import LessonPlan


class FakeRedis:
    """Minimal in-memory stand-in for redis.Redis with decode_responses=True."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.expiry: dict[str, int | None] = {}

    def get(self, key: str) -> str | None:
        return self.store.get(key)

    def set(self, key: str, value: str, ex: int | None = None) -> None:
        self.store[key] = value
        self.expiry[key] = ex


class FailingRedis:
    def get(self, key: str) -> str | None:
        raise redis.ConnectionError("connection refused")

    def set(self, key: str, value: str, ex: int | None = None) -> None:
        raise redis.ConnectionError("connection refused")


def _key(**overrides: str | None) -> str:
    params: dict[str, str | None] = {
        "topic": "Hip Escape Fundamentals",
        "sport": "Brazilian Jiu-Jitsu",
        "level": "beginner",
        "duration": "45 minutes",
        "detailed_instructions": None,
        "detail_level": "masterclass",
    }
    params.update(overrides)
    return build_cache_key(**params)


def test_cache_key_is_deterministic() -> None:
    """Test that identical inputs give the same prefixed key."""
    assert _key() == _key()
    assert _key().startswith(CACHE_KEY_PREFIX)
    assert len(_key()) == len(CACHE_KEY_PREFIX) + 64


@pytest.mark.parametrize(
    "override",
    [
        {"topic": "Hip Escape Drills"},
        {"sport": "Wrestling"},
        {"level": "advanced"},
        {"duration": "60 minutes"},
        {"detailed_instructions": "Elbow to knee."},
        {"detail_level": "expert"},
    ],
)
def test_cache_key_changes_with_each_input(override: dict[str, str]) -> None:
    """Test that every composer input contributes to the key."""
    assert _key(**override) != _key()


def test_cache_key_is_not_ambiguous() -> None:
    """Test that field boundaries cannot collide."""
    assert _key(topic="a|b", sport="c") != _key(topic="a", sport="b|c")


def test_in_memory_cache_round_trip(sample_plan: LessonPlan) -> None:
    """Test get and set on the in-memory cache."""
    cache = InMemoryLessonCache()
    assert cache.get("missing") is None

    cache.set("key", sample_plan)
    assert cache.get("key") == sample_plan
    assert len(cache) == 1


def test_in_memory_caches_are_independent(sample_plan: LessonPlan) -> None:
    """Test that instances do not share state."""
    first = InMemoryLessonCache()
    first.set("key", sample_plan)
    assert InMemoryLessonCache().get("key") is None


def test_redis_cache_stores_wire_json_with_ttl(sample_plan: LessonPlan) -> None:
    """Test that plans are stored in wire form with the configured TTL."""
    client = FakeRedis()
    cache = RedisLessonCache(client=client, ttl_seconds=3600)

    cache.set("lessons:plan:abc", sample_plan)

    stored = json.loads(client.store["lessons:plan:abc"])
    assert stored["parts"][0]["partTitle"] == "Part 1: Warm-up"
    assert client.expiry["lessons:plan:abc"] == 3600
    assert cache.get("lessons:plan:abc").to_wire() == sample_plan.to_wire()


def test_redis_cache_miss_returns_none() -> None:
    """Test that a missing key returns None."""
    assert RedisLessonCache(client=FakeRedis()).get("lessons:plan:missing") is None


def test_redis_errors_are_non_fatal(sample_plan: LessonPlan) -> None:
    """Test that Redis failures are swallowed by the cache."""
    cache = RedisLessonCache(client=FailingRedis())

    assert cache.get("lessons:plan:abc") is None
    cache.set("lessons:plan:abc", sample_plan)


def test_unreadable_cached_value_is_ignored() -> None:
    """Test that a corrupt cache entry is treated as a miss."""
    client = FakeRedis()
    client.store["lessons:plan:abc"] = '{"title": "incomplete"}'

    assert RedisLessonCache(client=client).get("lessons:plan:abc") is None


def test_redis_cache_defaults_from_settings() -> None:
    """Test that URL and TTL default to settings without connecting."""
    cache = RedisLessonCache()
    assert cache.url == settings.redis_url
    assert cache.ttl_seconds == settings.lesson_cache_ttl_seconds
