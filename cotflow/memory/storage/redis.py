"""
Redis storage backend
"""

import redis.asyncio as redis

from cotflow.domain.messages import Message
from cotflow.utils.logging import get_logger

from .base import MemoryStorage

logger = get_logger(__name__)


class RedisStorage(MemoryStorage):
    """Redis storage backend for persistent memory."""

    KEY_PREFIX = "cotflow:session:"

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        ttl: int | None = None,
        client: redis.Redis | None = None,
        **kwargs,
    ) -> None:
        self.redis_url = redis_url
        self.ttl = ttl
        self.client = client
        self.kwargs = kwargs

    def _key(self, session_id: str) -> str:
        return f"{self.KEY_PREFIX}{session_id}:messages"

    async def _get_client(self) -> redis.Redis:
        """Lazy initialization of Redis client."""
        if self.client is None:
            self.client = redis.from_url(self.redis_url, **self.kwargs)
        return self.client

    async def append_message(self, session_id: str, message: Message) -> None:
        client = await self._get_client()
        key = self._key(session_id)
        await client.rpush(key, message.model_dump_json())
        if self.ttl:
            await client.expire(key, self.ttl)

    async def get_messages(self, session_id: str, limit: int | None = None) -> list[Message]:
        client = await self._get_client()
        key = self._key(session_id)

        if limit:
            data = await client.lrange(key, -limit, -1)
        else:
            data = await client.lrange(key, 0, -1)

        messages = []
        for item in data:
            try:
                messages.append(Message.model_validate_json(item))
            except ValueError as e:
                logger.error("message_deserialize_failed", session_id=session_id, error=str(e))
        return messages

    async def clear_messages(self, session_id: str) -> None:
        client = await self._get_client()
        await client.delete(self._key(session_id))

    async def clear_all(self) -> None:
        client = await self._get_client()
        keys = [key async for key in client.scan_iter(match=f"{self.KEY_PREFIX}*")]
        if keys:
            await client.delete(*keys)

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client is not None:
            await self.client.aclose()
