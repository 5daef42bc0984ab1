"""Clock port."""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock returning the current UTC time."""
    return datetime.now(timezone.utc)
