"""Lesson plan caching.

Caches are injected into LessonGenerationService; nothing is cached unless a
cache is passed in. Keys are a SHA-256 hash of the prompt composer inputs, so
identical requests map to the same cached plan.
"""

from __future__ import annotations

import hashlib
import json
from typing import Protocol

import redis
from loguru import logger
from pydantic import ValidationError

from coachlab.config.settings import settings
from coachlab.lessons.schemas import LessonPlan

CACHE_KEY_PREFIX = "lessons:plan:"


class LessonCache(Protocol):
    def get(self, key: str) -> LessonPlan | None: ...

    def set(self, key: str, plan: LessonPlan) -> None: ...


def build_cache_key(
    topic: str,
    sport: str,
    level: str,
    duration: str,
    detailed_instructions: str | None,
    detail_level: str,
) -> str:
    """Generate a cache key from the prompt composer inputs.

    Args:
        topic: Lesson topic
        sport: Sport name
        level: Athlete level
        duration: Free-form duration
        detailed_instructions: Optional instructor notes
        detail_level: Detail preset name

    Returns:
        Cache key string
    """
    key_parts = [topic, sport, str(level), duration, detailed_instructions or "", str(detail_level)]
    key_string = json.dumps(key_parts, ensure_ascii=False)
    key_hash = hashlib.sha256(key_string.encode()).hexdigest()
    return f"{CACHE_KEY_PREFIX}{key_hash}"


class InMemoryLessonCache:
    """Dict-backed cache, scoped to one instance."""

    def __init__(self) -> None:
        self._plans: dict[str, LessonPlan] = {}

    def get(self, key: str) -> LessonPlan | None:
        return self._plans.get(key)

    def set(self, key: str, plan: LessonPlan) -> None:
        self._plans[key] = plan

    def __len__(self) -> int:
        return len(self._plans)


class RedisLessonCache:
    """Redis-backed cache storing plans in their JSON wire form with a TTL.

    Redis failures are non-fatal: reads return None and writes are dropped.
    """

    def __init__(
        self,
        client: redis.Redis | None = None,
        url: str | None = None,
        ttl_seconds: int | None = None,
    ) -> None:
        self._client = client
        self.url = url or settings.redis_url
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.lesson_cache_ttl_seconds

    def _get_client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(self.url, decode_responses=True)
        return self._client

    def get(self, key: str) -> LessonPlan | None:
        try:
            cached = self._get_client().get(key)
        except redis.RedisError as e:
            logger.debug("Redis cache read failed (non-fatal)", error=str(e))
            return None

        if not cached or not isinstance(cached, str):
            return None

        try:
            return LessonPlan.model_validate_json(cached)
        except ValidationError as e:
            logger.debug("Discarding unreadable cached lesson plan", key=key, error=str(e))
            return None

    def set(self, key: str, plan: LessonPlan) -> None:
        try:
            self._get_client().set(key, json.dumps(plan.to_wire()), ex=self.ttl_seconds)
        except redis.RedisError as e:
            logger.debug("Redis cache write failed (non-fatal)", error=str(e))
