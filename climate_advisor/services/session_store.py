"""Per-session profile storage: in-process dict or Redis with a TTL.

``lock(session_id)`` serializes the read-merge-write cycle of one session so
concurrent messages for the same session cannot overwrite each other's
profile updates.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any, Protocol

from redis.asyncio import Redis

from climate_advisor.schemas.advice import UserProfile


class SessionStore(Protocol):
	async def get(self, session_id: str) -> UserProfile | None: ...

	async def save(self, session_id: str, profile: UserProfile) -> None: ...

	async def delete(self, session_id: str) -> bool: ...

	def lock(self, session_id: str) -> AbstractAsyncContextManager[Any]: ...


class InMemorySessionStore:
	def __init__(self) -> None:
		self._profiles: dict[str, UserProfile] = {}
		self._locks: dict[str, asyncio.Lock] = {}

	async def get(self, session_id: str) -> UserProfile | None:
		return self._profiles.get(session_id)

	async def save(self, session_id: str, profile: UserProfile) -> None:
		self._profiles[session_id] = profile

	async def delete(self, session_id: str) -> bool:
		return self._profiles.pop(session_id, None) is not None

	@asynccontextmanager
	async def lock(self, session_id: str) -> AsyncIterator[None]:
		session_lock = self._locks.setdefault(session_id, asyncio.Lock())
		async with session_lock:
			yield


class RedisSessionStore:
	def __init__(self, redis_client: Redis, ttl_seconds: int, lock_timeout_seconds: float = 30.0):
		self.redis_client = redis_client
		self.ttl_seconds = ttl_seconds
		self.lock_timeout_seconds = lock_timeout_seconds

	@staticmethod
	def _key(session_id: str) -> str:
		return f"session:{session_id}:profile"

	@staticmethod
	def _lock_key(session_id: str) -> str:
		return f"session:{session_id}:lock"

	async def get(self, session_id: str) -> UserProfile | None:
		value = await self.redis_client.get(self._key(session_id))
		if value is None:
			return None
		return UserProfile(**json.loads(value))

	async def save(self, session_id: str, profile: UserProfile) -> None:
		payload = profile.model_dump(mode="json")
		await self.redis_client.setex(self._key(session_id), self.ttl_seconds, json.dumps(payload))

	async def delete(self, session_id: str) -> bool:
		removed = await self.redis_client.delete(self._key(session_id))
		return bool(removed)

	def lock(self, session_id: str) -> AbstractAsyncContextManager[Any]:
		# Expires on its own if the holder dies mid-request.
		return self.redis_client.lock(self._lock_key(session_id), timeout=self.lock_timeout_seconds)
