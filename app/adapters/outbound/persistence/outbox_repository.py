"""SQLAlchemy outbox repository adapter."""

from datetime import datetime

from sqlalchemy.orm import Session

from app.adapters.outbound.persistence.hooks import CLOCK_INFO_KEY
from app.adapters.outbound.persistence.integrity import flush_or_raise
from app.adapters.outbound.persistence.mapping import as_utc
from app.adapters.outbound.persistence.models import OutboxEventModel
from app.application.dtos.outbox import (
    OUTBOX_STATUS_PENDING,
    OUTBOX_STATUS_PUBLISHED,
    OutboxMessage,
)
from app.application.ports.clock import utc_now
from app.application.ports.outbox_repository import OutboxRepository

MAX_ERROR_LENGTH = 2000


class SqlAlchemyOutboxRepository(OutboxRepository):
    """SQLAlchemy implementation of the outbox bound to one session."""

    def __init__(self, session: Session) -> None:
        """
        Initialize repository.

        Args:
            session: Session of the enclosing unit of work
        """
        self._session = session

    def _model_to_dto(self, model: OutboxEventModel) -> OutboxMessage:
        return OutboxMessage(
            id=model.id,
            event_id=model.event_id,
            event_type=model.event_type,
            aggregate_id=model.aggregate_id,
            payload=model.payload,
            status=model.status,
            attempts=model.attempts,
            last_error=model.last_error,
            created_at=as_utc(model.created_at),
            published_at=as_utc(model.published_at),
        )

    def _get(self, message_id: int) -> OutboxEventModel:
        model = self._session.get(OutboxEventModel, message_id)
        if model is None:
            raise LookupError(f"Outbox message {message_id} not found")
        return model

    async def add(self, message: OutboxMessage) -> OutboxMessage:
        """
        Store an event in the current transaction.

        Args:
            message: Outbox message to store

        Returns:
            Stored message with its identifier
        """
        clock = self._session.info.get(CLOCK_INFO_KEY, utc_now)
        model = OutboxEventModel(
            event_id=message.event_id,
            event_type=message.event_type,
            aggregate_id=message.aggregate_id,
            payload=message.payload,
            status=OUTBOX_STATUS_PENDING,
            attempts=0,
            created_at=message.created_at or clock(),
        )
        self._session.add(model)
        flush_or_raise(self._session)
        return self._model_to_dto(model)

    async def fetch_pending(self, limit: int) -> list[OutboxMessage]:
        """
        Get pending messages in insertion order.

        Rows are not locked: a single relay runs per deployment and consumers
        deduplicate on event_id if two relays ever overlap.

        Args:
            limit: Maximum number of messages

        Returns:
            Pending messages
        """
        models = (
            self._session.query(OutboxEventModel)
            .filter(OutboxEventModel.status == OUTBOX_STATUS_PENDING)
            .order_by(OutboxEventModel.id)
            .limit(limit)
            .all()
        )
        return [self._model_to_dto(model) for model in models]

    async def mark_published(self, message_id: int, published_at: datetime) -> None:
        model = self._get(message_id)
        model.status = OUTBOX_STATUS_PUBLISHED
        model.published_at = published_at
        model.last_error = None
        flush_or_raise(self._session)

    async def mark_failed(self, message_id: int, error: str) -> None:
        model = self._get(message_id)
        model.attempts = (model.attempts or 0) + 1
        model.last_error = error[:MAX_ERROR_LENGTH]
        flush_or_raise(self._session)
