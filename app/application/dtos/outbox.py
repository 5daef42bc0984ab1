"""Outbox DTOs."""

from datetime import datetime
from typing import Any, Optional

from app.application.dtos.base import DTO

OUTBOX_STATUS_PENDING = "PENDING"
OUTBOX_STATUS_PUBLISHED = "PUBLISHED"


class OutboxMessage(DTO):
    """Event waiting in the outbox table for broker delivery."""

    id: Optional[int] = None
    event_id: str
    event_type: str
    aggregate_id: str
    payload: dict[str, Any]
    status: str = OUTBOX_STATUS_PENDING
    attempts: int = 0
    last_error: Optional[str] = None
    created_at: Optional[datetime] = None
    published_at: Optional[datetime] = None
