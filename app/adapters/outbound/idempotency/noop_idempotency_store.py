"""No-op idempotency store adapter for when deduplication is disabled."""

from app.application.ports.idempotency_store import IdempotencyStore


class NoOpIdempotencyStore(IdempotencyStore):
    """No-op adapter: every event is treated as new."""

    async def is_processed(self, key: str) -> bool:
        return False

    async def mark_processed(self, key: str, ttl_seconds: int) -> bool:
        return True

    async def close(self) -> None:
        pass
