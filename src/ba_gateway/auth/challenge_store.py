"""Single-use login challenges, in memory or in Redis.

A challenge is consumed on first lookup whether or not the signature then
verifies; a failed attempt needs a fresh challenge. The in-memory store drops
expired challenges on every write and caps how many it holds; Redis expires
them itself.
"""

import asyncio
import json
from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Protocol

import redis.asyncio as aioredis

from src.ba_common.datetime_utils import utc_now

_REDIS_KEY = "auth:challenge:{}"
MAX_PENDING_CHALLENGES = 10_000


@dataclass
class Challenge:
    id: str
    address: str
    message: str
    expires_at: datetime


class ChallengeStoreProtocol(Protocol):
    async def put(self, challenge: Challenge, ttl_seconds: int) -> None: ...

    async def consume(self, challenge_id: str) -> Challenge | None: ...


class InMemoryChallengeStore:
    def __init__(
        self,
        max_items: int = MAX_PENDING_CHALLENGES,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._items: dict[str, Challenge] = {}
        self._max_items = max_items
        self._clock = clock
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._items)

    async def put(self, challenge: Challenge, ttl_seconds: int) -> None:
        async with self._lock:
            self._purge_expired()
            while len(self._items) >= self._max_items:
                # dict order is insertion order, so this evicts the oldest.
                del self._items[next(iter(self._items))]
            self._items[challenge.id] = challenge

    async def consume(self, challenge_id: str) -> Challenge | None:
        # Expired entries are still returned here so the caller can report expiry.
        async with self._lock:
            return self._items.pop(challenge_id, None)

    def _purge_expired(self) -> None:
        now = self._clock()
        for key in [k for k, c in self._items.items() if c.expires_at <= now]:
            del self._items[key]


class RedisChallengeStore:
    def __init__(self, redis: aioredis.Redis) -> None:
        self._redis = redis

    async def put(self, challenge: Challenge, ttl_seconds: int) -> None:
        payload = asdict(challenge)
        payload["expires_at"] = challenge.expires_at.isoformat()
        await self._redis.set(
            _REDIS_KEY.format(challenge.id), json.dumps(payload), ex=ttl_seconds
        )

    async def consume(self, challenge_id: str) -> Challenge | None:
        raw = await self._redis.getdel(_REDIS_KEY.format(challenge_id))
        if raw is None:
            return None
        data = json.loads(raw)
        data["expires_at"] = datetime.fromisoformat(data["expires_at"])
        return Challenge(**data)
