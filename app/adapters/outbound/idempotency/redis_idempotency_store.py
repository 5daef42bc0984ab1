"""Redis idempotency store adapter."""

from typing import Optional

from redis import asyncio as aioredis

from app.application.ports.idempotency_store import IdempotencyStore


class RedisIdempotencyStore(IdempotencyStore):
    """Redis adapter remembering processed event identifiers."""

    DEFAULT_KEY_PREFIX = "vehicle-created:processed:"

    def __init__(self, redis_url: str, key_prefix: str = DEFAULT_KEY_PREFIX) -> None:
        """
        Initialize Redis idempotency store.

        Args:
            redis_url: Redis connection URL
            key_prefix: Namespace of the processed markers
        """
        self._redis_url = redis_url
        self._key_prefix = key_prefix
        self._client: Optional[aioredis.Redis] = None

    async def _get_client(self) -> aioredis.Redis:
        """
        Get or create Redis client.

        Returns:
            Redis client instance
        """
        if self._client is None:
            self._client = await aioredis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    def _make_key(self, event_id: str) -> str:
        return f"{self._key_prefix}{event_id}"

    async def is_processed(self, key: str) -> bool:
        """
        Check if an event has been processed.

        Args:
            key: Event identifier

        Returns:
            True if the event has been processed, False otherwise
        """
        client = await self._get_client()
        exists = await client.exists(self._make_key(key))
        return exists > 0

    async def mark_processed(self, key: str, ttl_seconds: int) -> bool:
        """
        Mark an event as processed, unless another consumer already did.

        Args:
            key: Event identifier
            ttl_seconds: Time-to-live in seconds

        Returns:
            True if newly marked, False if the marker already existed
        """
        client = await self._get_client()
        created = await client.set(self._make_key(key), "1", ex=ttl_seconds, nx=True)
        return bool(created)

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None
