"""Outbox repository port."""

from abc import ABC, abstractmethod
from datetime import datetime

from app.application.dtos.outbox import OutboxMessage


class OutboxRepository(ABC):
    """Port interface for the transactional outbox."""

    @abstractmethod
    async def add(self, message: OutboxMessage) -> OutboxMessage:
        """
        Store an event in the current transaction.

        Args:
            message: Outbox message to store

        Returns:
            Stored message with its identifier
        """
        pass

    @abstractmethod
    async def fetch_pending(self, limit: int) -> list[OutboxMessage]:
        """
        Get pending messages in insertion order, locking them for this transaction.

        Args:
            limit: Maximum number of messages

        Returns:
            Pending messages
        """
        pass

    @abstractmethod
    async def mark_published(self, message_id: int, published_at: datetime) -> None:
        pass

    @abstractmethod
    async def mark_failed(self, message_id: int, error: str) -> None:
        """Record a failed delivery attempt, leaving the message pending."""
        pass
