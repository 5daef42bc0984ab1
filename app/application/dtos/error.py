"""Error response DTO."""

from datetime import datetime
from typing import Optional

from app.application.dtos.base import DTO


class ErrorResponse(DTO):
    """Uniform error body returned by every failing endpoint."""

    timestamp: datetime
    status: int
    error: str
    message: str
    path: str
    details: Optional[list[str]] = None
