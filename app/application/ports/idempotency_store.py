"""Idempotency store port."""

from abc import ABC, abstractmethod


class IdempotencyStore(ABC):
    """Port interface for remembering processed event identifiers."""

    @abstractmethod
    async def is_processed(self, key: str) -> bool:
        """
        Check if a key has been processed.

        Args:
            key: Unique identifier of the processed item

        Returns:
            True if the key has been processed, False otherwise
        """
        pass

    @abstractmethod
    async def mark_processed(self, key: str, ttl_seconds: int) -> bool:
        """
        Mark a key as processed with a TTL.

        Args:
            key: Unique identifier of the processed item
            ttl_seconds: Time-to-live in seconds

        Returns:
            True if the key was newly marked, False if it was already present
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying connection."""
        pass
